"""Rate limit policy configuration."""

from pydantic import BaseModel


class RateLimitPolicy(BaseModel, frozen=True):
    """A single fixed-window policy."""

    window_seconds: float
    max_count: int


class RateLimitConfig(BaseModel, frozen=True):
    """Fixed-window policies for login and chat, plus the global ceiling."""

    login_ip: RateLimitPolicy
    login_name: RateLimitPolicy
    chat: RateLimitPolicy
    global_limit: str
