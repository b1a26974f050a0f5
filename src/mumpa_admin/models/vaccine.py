"""National vaccine schedule models."""

from pydantic import BaseModel, Field, model_validator


class VaccineItem(BaseModel):
    """Single dose in a schedule. Ages given in years are normalized to months."""

    id: str = Field(..., description="Stable dose id, e.g. penta-2m")
    name: str
    age_months: float | None = Field(default=None)
    age_years: float | None = Field(default=None, exclude=True)
    notes: str = Field(default="")

    @model_validator(mode="after")
    def _years_to_months(self) -> "VaccineItem":
        if self.age_months is None and self.age_years is not None:
            self.age_months = round(self.age_years * 12 * 10) / 10
        if self.age_months is None:
            raise ValueError(f"Vaccine item {self.id} has no age")
        return self

    def to_document(self) -> dict[str, object]:
        age = self.age_months
        if age is not None and float(age).is_integer():
            age = int(age)
        return {"id": self.id, "name": self.name, "ageMonths": age, "notes": self.notes}


class VaccineScheduleDefinition(BaseModel):
    """Schedule as declared in config/vaccine_schedules.yaml."""

    display_name: str
    country_names: list[str] = Field(default_factory=list, description="Candidate countries.name values")
    items: list[VaccineItem] = Field(default_factory=list)
