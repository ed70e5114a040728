"""Application configuration using Pydantic Settings V2."""

from functools import cached_property
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from chatwrapper.core.settings import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    HistoryConfig,
    LLMConfig,
    RateLimitConfig,
    RateLimitPolicy,
    ServerConfig,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Flat fields are loaded directly from environment variables.
    Domain properties provide grouped access (e.g. settings.llm.provider).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM Provider
    llm_provider: Literal["openai", "anthropic"] = Field(
        default="openai",
        description="LLM provider to use",
    )
    llm_temperature: float = Field(
        default=0.4,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for completion calls",
    )

    # OpenAI
    openai_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="OpenAI API key",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model name",
    )

    # Anthropic
    anthropic_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Anthropic API key",
    )
    anthropic_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Anthropic model name",
    )

    # App
    app_name: str = Field(
        default="chatwrapper",
        description="Application name",
    )
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level",
    )
    app_base_url: str = Field(
        default="http://localhost:3000",
        description="Origin allowed by CORS (the browser front-end)",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Server host",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Server port",
    )
    reload: bool = Field(
        default=False,
        description="Auto-reload on code changes",
    )

    # Session auth
    session_cookie_name: str = Field(
        default="sid",
        description="Name of the session cookie",
    )
    session_ttl_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Absolute session lifetime in days",
    )
    cookie_secure: bool = Field(
        default=False,
        description="Set the Secure flag on the session cookie",
    )
    password_min_length: int = Field(
        default=8,
        ge=1,
        le=128,
        description="Minimum password length",
    )
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=16,
        description="bcrypt cost factor",
    )

    # Rate limits
    login_ip_window_seconds: float = Field(default=300, gt=0)
    login_ip_max_attempts: int = Field(default=50, ge=1)
    login_name_window_seconds: float = Field(default=300, gt=0)
    login_name_max_attempts: int = Field(default=20, ge=1)
    chat_window_seconds: float = Field(default=60, gt=0)
    chat_max_calls: int = Field(default=60, ge=1)
    global_rate_limit: str = Field(
        default="600/minute",
        description="Per-IP ceiling on all requests (slowapi syntax)",
    )

    # History
    history_prompt_window: int = Field(
        default=20,
        ge=0,
        le=200,
        description="Messages re-injected as context for each chat call",
    )
    history_ui_window: int = Field(
        default=30,
        ge=1,
        le=500,
        description="Messages returned to the UI on load",
    )
    usage_summary_days: int = Field(
        default=30,
        ge=1,
        le=366,
        description="Number of days in the usage summary",
    )

    # Database
    database_url: SecretStr = Field(
        default=SecretStr("sqlite+aiosqlite:///./data/chatwrapper.db"),
        description="Async database URL",
    )

    # --- Domain properties ---

    @cached_property
    def llm(self) -> LLMConfig:
        """LLM provider configuration."""
        return LLMConfig(
            provider=self.llm_provider,
            openai_api_key=self.openai_api_key,
            openai_model=self.openai_model,
            anthropic_api_key=self.anthropic_api_key,
            anthropic_model=self.anthropic_model,
            temperature=self.llm_temperature,
        )

    @cached_property
    def app(self) -> AppConfig:
        """Application environment configuration."""
        return AppConfig(
            name=self.app_name,
            env=self.app_env,
            debug=self.debug,
            log_level=self.log_level,
            base_url=self.app_base_url,
        )

    @cached_property
    def server(self) -> ServerConfig:
        """Server configuration."""
        return ServerConfig(
            host=self.host,
            port=self.port,
            reload=self.reload,
        )

    @cached_property
    def auth(self) -> AuthConfig:
        """Session cookie and password configuration."""
        return AuthConfig(
            cookie_name=self.session_cookie_name,
            session_ttl_days=self.session_ttl_days,
            cookie_secure=self.cookie_secure,
            password_min_length=self.password_min_length,
            bcrypt_rounds=self.bcrypt_rounds,
        )

    @cached_property
    def rate_limit(self) -> RateLimitConfig:
        """Fixed-window rate limit policies."""
        return RateLimitConfig(
            login_ip=RateLimitPolicy(
                window_seconds=self.login_ip_window_seconds,
                max_count=self.login_ip_max_attempts,
            ),
            login_name=RateLimitPolicy(
                window_seconds=self.login_name_window_seconds,
                max_count=self.login_name_max_attempts,
            ),
            chat=RateLimitPolicy(
                window_seconds=self.chat_window_seconds,
                max_count=self.chat_max_calls,
            ),
            global_limit=self.global_rate_limit,
        )

    @cached_property
    def history(self) -> HistoryConfig:
        """History window configuration."""
        return HistoryConfig(
            prompt_window=self.history_prompt_window,
            ui_window=self.history_ui_window,
            usage_summary_days=self.usage_summary_days,
        )

    @cached_property
    def database(self) -> DatabaseConfig:
        """Database connection configuration."""
        return DatabaseConfig(url=self.database_url)


# Global settings instance
settings = Settings()
