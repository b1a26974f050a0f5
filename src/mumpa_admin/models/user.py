"""User directory models."""

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """Account as known to the authentication provider."""

    uid: str = Field(..., description="Auth uid, also the users/ document id")
    email: str | None = Field(default=None)
    display_name: str | None = Field(default=None)
    providers: list[str] = Field(default_factory=list, description="Sign-in provider ids")


class UserSummary(BaseModel):
    """Auth account joined with its Firestore profile document."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    providers: list[str] = Field(default_factory=list)
    has_profile: bool = Field(default=False, description="users/<uid> exists")
    role: str | None = None
    is_admin: bool = False
    is_active: bool = True


class UserFieldCounts(BaseModel):
    """Name field audit over the users collection."""

    total: int = 0
    with_display_name: int = 0
    with_name: int = 0
    with_both: int = 0
    with_neither: int = 0

    def percent(self, count: int) -> float:
        return round(count / self.total * 100, 1) if self.total else 0.0
