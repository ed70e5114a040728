"""Session cookie and password policy configuration."""

from datetime import timedelta

from pydantic import BaseModel


class AuthConfig(BaseModel, frozen=True):
    """Session and credential settings."""

    cookie_name: str
    session_ttl_days: int
    cookie_secure: bool
    password_min_length: int
    bcrypt_rounds: int

    @property
    def session_ttl(self) -> timedelta:
        """Absolute lifetime of a freshly issued session."""
        return timedelta(days=self.session_ttl_days)

    @property
    def cookie_max_age(self) -> int:
        """Cookie max-age in seconds, matching the session lifetime."""
        return int(self.session_ttl.total_seconds())
