"""Authentication request/response schemas."""

from pydantic import ConfigDict, Field, StrictStr, field_validator

from chatwrapper.core.config import settings
from chatwrapper.schemas.response_schema import CamelModel


class LoginRequest(CamelModel):
    """User login request."""

    login_name: StrictStr = Field(min_length=1, max_length=100, description="Login name")
    password: StrictStr = Field(min_length=1, max_length=256, description="Password")


class ChangePasswordRequest(CamelModel):
    """Password change request for the current user."""

    current_password: StrictStr = Field(min_length=1, max_length=256)
    new_password: StrictStr = Field(max_length=256)

    @field_validator("new_password")
    @classmethod
    def validate_length(cls, v: str) -> str:
        if len(v) < settings.auth.password_min_length:
            raise ValueError(
                f"Password must be at least {settings.auth.password_min_length} characters"
            )
        return v


class UserResponse(CamelModel):
    """Public user representation."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    display_name: str
    login_name: str
    is_admin: bool


class UserEnvelope(CamelModel):
    """Single-user response body."""

    model_config = ConfigDict(frozen=True)

    user: UserResponse
