"""Age projection and growth percentile curves."""

from mumpa_admin.growth.age_projector import elapsed_days, project_age
from mumpa_admin.growth.percentiles import CALIBRATION, build_percentile_curve, get_anchors

__all__ = [
    "CALIBRATION",
    "build_percentile_curve",
    "elapsed_days",
    "get_anchors",
    "project_age",
]
