"""Global dependencies for the application."""

from functools import lru_cache

from fastapi import Depends, Request
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, ConfigDict
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.core.config import settings
from chatwrapper.core.database import get_async_session
from chatwrapper.core.exceptions import AuthenticationError, AuthorizationError
from chatwrapper.core.rate_limit import FixedWindowRateLimiter
from chatwrapper.models.user import User
from chatwrapper.repositories.message_repo import MessageRepository
from chatwrapper.repositories.usage_repo import UsageRepository
from chatwrapper.repositories.user_repo import UserRepository
from chatwrapper.services.admin_service import AdminService
from chatwrapper.services.auth_service import AuthService
from chatwrapper.services.chat_service import ChatService
from chatwrapper.services.completion_service import CompletionClient
from chatwrapper.services.history_service import HistoryService
from chatwrapper.services.session_service import SessionService

# --- Completion model ---


@lru_cache
def get_llm() -> BaseChatModel:
    """Get the LLM instance based on the configured provider."""
    llm_config = settings.llm
    match llm_config.provider:
        case "openai":
            return ChatOpenAI(
                model=llm_config.openai_model,
                api_key=llm_config.openai_api_key,
                temperature=llm_config.temperature,
            )
        case "anthropic":
            return ChatAnthropic(  # type: ignore[call-arg]
                model_name=llm_config.anthropic_model,
                api_key=llm_config.anthropic_api_key,
                temperature=llm_config.temperature,
            )
        case _:
            raise ValueError(f"Unsupported LLM provider: {llm_config.provider}")


def get_completion_client() -> CompletionClient:
    """Get the completion client for the configured model."""
    return CompletionClient(llm=get_llm(), model_name=settings.llm.model)


# --- Process-local state ---


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    """Get the limiter held on application state."""
    return request.app.state.rate_limiter


def get_client_ip(request: Request) -> str:
    """Client address used as the per-IP login throttle key."""
    return get_remote_address(request)


# --- Repositories and services ---


def get_user_repository(
    session: AsyncSession = Depends(get_async_session),
) -> UserRepository:
    """Get UserRepository bound to the current session."""
    return UserRepository(session)


def get_message_repository(
    session: AsyncSession = Depends(get_async_session),
) -> MessageRepository:
    """Get MessageRepository bound to the current session."""
    return MessageRepository(session)


def get_usage_repository(
    session: AsyncSession = Depends(get_async_session),
) -> UsageRepository:
    """Get UsageRepository bound to the current session."""
    return UsageRepository(session)


def get_session_service(
    session: AsyncSession = Depends(get_async_session),
) -> SessionService:
    """Get SessionService bound to the current session."""
    return SessionService(session)


def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    session_service: SessionService = Depends(get_session_service),
    rate_limiter: FixedWindowRateLimiter = Depends(get_rate_limiter),
    session: AsyncSession = Depends(get_async_session),
) -> AuthService:
    """Get AuthService with all dependencies."""
    return AuthService(
        user_repo=user_repo,
        session_service=session_service,
        rate_limiter=rate_limiter,
        session=session,
    )


def get_admin_service(
    user_repo: UserRepository = Depends(get_user_repository),
    session_service: SessionService = Depends(get_session_service),
    session: AsyncSession = Depends(get_async_session),
) -> AdminService:
    """Get AdminService with all dependencies."""
    return AdminService(
        user_repo=user_repo,
        session_service=session_service,
        session=session,
    )


# --- Identity ---


class CurrentUser(BaseModel):
    """Identity resolved from the session cookie for this request."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    login_name: str
    is_admin: bool

    @classmethod
    def from_user(cls, user: User) -> "CurrentUser":
        return cls(
            id=user.id,
            display_name=user.display_name,
            login_name=user.login_name,
            is_admin=user.is_admin,
        )


def get_session_token(request: Request) -> str | None:
    """Raw session token from the request cookie."""
    return request.cookies.get(settings.auth.cookie_name)


async def get_optional_user(
    token: str | None = Depends(get_session_token),
    session_service: SessionService = Depends(get_session_service),
) -> CurrentUser | None:
    """Resolve the session cookie once per request; anonymous yields None."""
    user = await session_service.resolve(token)
    if user is None:
        return None
    return CurrentUser.from_user(user)


def get_current_user(
    current_user: CurrentUser | None = Depends(get_optional_user),
) -> CurrentUser:
    """Require an authenticated caller."""
    if current_user is None:
        raise AuthenticationError
    return current_user


def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require an authenticated caller with the admin flag."""
    if not current_user.is_admin:
        raise AuthorizationError
    return current_user


# --- User-scoped services ---


def get_history_service(
    message_repo: MessageRepository = Depends(get_message_repository),
    usage_repo: UsageRepository = Depends(get_usage_repository),
    current_user: CurrentUser = Depends(get_current_user),
) -> HistoryService:
    """Get HistoryService for the authenticated user."""
    return HistoryService(
        message_repo=message_repo,
        usage_repo=usage_repo,
        user_id=current_user.id,
    )


def get_chat_service(
    message_repo: MessageRepository = Depends(get_message_repository),
    usage_repo: UsageRepository = Depends(get_usage_repository),
    completion_client: CompletionClient = Depends(get_completion_client),
    rate_limiter: FixedWindowRateLimiter = Depends(get_rate_limiter),
    session: AsyncSession = Depends(get_async_session),
) -> ChatService:
    """Get ChatService with persistence, completion client and limiter."""
    return ChatService(
        message_repo=message_repo,
        usage_repo=usage_repo,
        completion_client=completion_client,
        rate_limiter=rate_limiter,
        session=session,
    )
