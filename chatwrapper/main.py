"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from chatwrapper.api.common.admin_router import router as admin_router
from chatwrapper.api.common.auth_router import router as auth_router
from chatwrapper.api.common.chat_router import router as chat_router
from chatwrapper.core.bootstrap import ensure_bootstrap_admin
from chatwrapper.core.config import settings
from chatwrapper.core.database import async_session_factory, engine, init_models
from chatwrapper.core.exceptions import (
    AppException,
    app_exception_handler,
    rate_limit_exceeded_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from chatwrapper.core.logging_config import configure_logging
from chatwrapper.core.middleware import RequestLoggingMiddleware
from chatwrapper.core.rate_limit import FixedWindowRateLimiter
from chatwrapper.core.settings import AppConfig, LLMConfig
from chatwrapper.schemas.response_schema import OkResponse

configure_logging()
logger = structlog.get_logger()


def check_provider_credentials(llm: LLMConfig, app_config: AppConfig) -> None:
    """Refuse to start outside development when the provider has no API key."""
    if llm.api_key.get_secret_value():
        return
    if app_config.is_development:
        logger.warning("No API key configured for provider", provider=llm.provider)
        return
    logger.error(
        "No API key configured for provider",
        provider=llm.provider,
        environment=app_config.env,
    )
    raise RuntimeError(f"Missing API key for LLM provider '{llm.provider}'")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.app.env,
        llm_provider=settings.llm.provider,
        model=settings.llm.model,
        url=settings.server.local_url,
    )
    check_provider_credentials(settings.llm, settings.app)

    await init_models()
    async with async_session_factory() as db_session:
        await ensure_bootstrap_admin(db_session)
    yield
    await engine.dispose()
    logger.info("Shutting down application")


app = FastAPI(
    title=settings.app.name,
    description="Personal multi-user chat front-end for a hosted language model",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.app.debug,
)

# Fixed-window counters for login and chat (process-local)
app.state.rate_limiter = FixedWindowRateLimiter()

# Coarse per-IP ceiling on every request
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit.global_limit],
)
app.state.limiter = limiter

# Exception handlers
app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

# Middleware (registration order: inner→outer, execution order: outer→inner)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.app.base_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/api/health", response_model=OkResponse)
async def health_check() -> OkResponse:
    """Health check endpoint."""
    return OkResponse()


# Register routers
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(chat_router)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "chatwrapper.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
    )
