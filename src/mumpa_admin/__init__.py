"""Mumpa admin toolkit - age projection, growth curves and data maintenance."""

__version__ = "0.1.0"
