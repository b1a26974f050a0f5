"""Child / pregnancy age records and their projection to the present."""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mumpa_admin.timeutils import to_utc_datetime


class _RecordBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    created_at: datetime = Field(..., alias="createdAt", description="Registration instant (UTC)")

    @field_validator("created_at", mode="before")
    @classmethod
    def _normalize_created_at(cls, v: Any) -> datetime:
        return to_utc_datetime(v)


class BornRecord(_RecordBase):
    """Child registered with an age in months."""

    kind: Literal["born"] = "born"
    age_in_months: int = Field(..., ge=0, alias="ageInMonths")

    @property
    def registered_value(self) -> int:
        return self.age_in_months


class UnbornRecord(_RecordBase):
    """Pregnancy registered with gestation weeks."""

    kind: Literal["unborn"] = "unborn"
    gestation_weeks: int = Field(..., ge=0, alias="gestationWeeks")

    @property
    def registered_value(self) -> int:
        return self.gestation_weeks


AgeRecord = Annotated[Union[BornRecord, UnbornRecord], Field(discriminator="kind")]


class ProjectedAge(BaseModel):
    """Registered value advanced to a reference instant. Never persisted."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["born", "unborn"]
    registered_value: int
    elapsed_days: int = Field(..., description="ceil of days since registration")
    elapsed_months: int | None = Field(default=None, description="Born only")
    elapsed_weeks: int | None = Field(default=None, description="Unborn only")
    current_age_in_months: int | None = Field(default=None, description="Born only")
    current_gestation_weeks: int | None = Field(default=None, description="Unborn only, clamped to [4, 42]")
    is_overdue: bool | None = Field(default=None, description="Unborn only, from the unclamped weeks")
