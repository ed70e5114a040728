"""Admin user-management schemas."""

from pydantic import ConfigDict, Field, StrictBool, StrictStr, field_validator

from chatwrapper.core.config import settings
from chatwrapper.schemas.auth_schema import UserResponse
from chatwrapper.schemas.response_schema import CamelModel


class CreateUserRequest(CamelModel):
    """Admin request to create an account."""

    login_name: StrictStr = Field(min_length=1, max_length=100)
    display_name: StrictStr | None = Field(default=None, max_length=255)
    password: StrictStr = Field(max_length=256)
    is_admin: StrictBool = False

    @field_validator("login_name")
    @classmethod
    def strip_login_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Login name must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def validate_length(cls, v: str) -> str:
        if len(v) < settings.auth.password_min_length:
            raise ValueError(
                f"Password must be at least {settings.auth.password_min_length} characters"
            )
        return v


class UserListResponse(CamelModel):
    """All accounts, ordered by login name."""

    model_config = ConfigDict(frozen=True)

    users: list[UserResponse]
