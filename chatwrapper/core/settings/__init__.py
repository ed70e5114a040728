"""Domain-specific configuration models."""

from chatwrapper.core.settings.app_config import AppConfig
from chatwrapper.core.settings.auth_config import AuthConfig
from chatwrapper.core.settings.database_config import DatabaseConfig
from chatwrapper.core.settings.history_config import HistoryConfig
from chatwrapper.core.settings.llm_config import LLMConfig
from chatwrapper.core.settings.rate_limit_config import (
    RateLimitConfig,
    RateLimitPolicy,
)
from chatwrapper.core.settings.server_config import ServerConfig

__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "HistoryConfig",
    "LLMConfig",
    "RateLimitConfig",
    "RateLimitPolicy",
    "ServerConfig",
]
