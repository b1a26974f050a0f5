"""Data models."""

from mumpa_admin.models.age_record import AgeRecord, BornRecord, ProjectedAge, UnbornRecord
from mumpa_admin.models.percentile import (
    AnchorPair,
    CurvePoint,
    MeasurementType,
    PercentileAnchor,
    Sex,
)
from mumpa_admin.models.user import AuthUser, UserFieldCounts, UserSummary
from mumpa_admin.models.vaccine import VaccineItem, VaccineScheduleDefinition

__all__ = [
    "AgeRecord",
    "AnchorPair",
    "AuthUser",
    "BornRecord",
    "CurvePoint",
    "MeasurementType",
    "PercentileAnchor",
    "ProjectedAge",
    "Sex",
    "UnbornRecord",
    "UserFieldCounts",
    "UserSummary",
    "VaccineItem",
    "VaccineScheduleDefinition",
]
