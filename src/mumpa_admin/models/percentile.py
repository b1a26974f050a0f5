"""Growth percentile reference curve models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MeasurementType(str, Enum):
    """Growth measurement tracked by a percentile curve."""

    WEIGHT = "weight"
    HEIGHT = "height"
    HEAD = "head"


class Sex(str, Enum):
    FEMALE = "F"
    MALE = "M"


class PercentileAnchor(BaseModel):
    """p3/p50/p97 calibration values at one end of the curve window."""

    model_config = ConfigDict(frozen=True)

    p3: float
    p50: float
    p97: float


class AnchorPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: PercentileAnchor
    end: PercentileAnchor


class CurvePoint(BaseModel):
    """One weekly point of a percentile curve."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    age_weeks: int = Field(..., ge=0, alias="ageWeeks")
    p3: float
    p50: float
    p97: float

    def to_document(self) -> dict[str, float | int]:
        return self.model_dump(by_alias=True)
