"""Authentication business logic."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.core.config import settings
from chatwrapper.core.exceptions import (
    InvalidCredentialsError,
    RateLimitError,
    UserNotFoundError,
)
from chatwrapper.core.rate_limit import (
    FixedWindowRateLimiter,
    login_ip_key,
    login_name_key,
)
from chatwrapper.core.security import DUMMY_HASH, hash_password, verify_password
from chatwrapper.models.user import User
from chatwrapper.repositories.user_repo import UserRepository
from chatwrapper.schemas.auth_schema import ChangePasswordRequest, LoginRequest
from chatwrapper.services.session_service import SessionService

logger = structlog.get_logger()


class AuthService:
    """Orchestrates login, logout and password changes."""

    def __init__(
        self,
        user_repo: UserRepository,
        session_service: SessionService,
        rate_limiter: FixedWindowRateLimiter,
        session: AsyncSession,
    ) -> None:
        self._user_repo = user_repo
        self._session_service = session_service
        self._rate_limiter = rate_limiter
        self._session = session

    async def login(self, request: LoginRequest, client_ip: str) -> tuple[User, str]:
        """Authenticate a user and return it with a fresh session token."""
        self._check_login_rate(request.login_name, client_ip)

        user = await self._user_repo.find_by_login_name(request.login_name)

        if user is None:
            await verify_password(request.password, DUMMY_HASH)
            logger.info("Login failed", reason="unknown_user", client_ip=client_ip)
            raise InvalidCredentialsError

        if not await verify_password(request.password, user.password_hash):
            logger.info("Login failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentialsError

        token = await self._session_service.create(user.id)
        await self._session.commit()
        logger.info("User logged in", user_id=user.id, login_name=user.login_name)
        return user, token

    async def logout(self, token: str | None) -> None:
        """Revoke the presented session token, if any."""
        if not token:
            return
        await self._session_service.invalidate(token)
        await self._session.commit()
        logger.info("User logged out")

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> str:
        """Replace the password, revoke every session and issue exactly one new one."""
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError

        if not await verify_password(request.current_password, user.password_hash):
            raise InvalidCredentialsError(message="Current password is incorrect")

        new_hash = await hash_password(request.new_password)
        await self._user_repo.update_password_hash(user.id, new_hash)
        await self._session_service.invalidate_all_for_user(user.id)
        token = await self._session_service.create(user.id)
        await self._session.commit()

        logger.info("Password changed", user_id=user.id)
        return token

    def _check_login_rate(self, login_name: str, client_ip: str) -> None:
        """Count the attempt against both keys; reject if either is over its limit."""
        policies = settings.rate_limit
        ip_ok = self._rate_limiter.hit(login_ip_key(client_ip), policies.login_ip)
        name_ok = self._rate_limiter.hit(login_name_key(login_name), policies.login_name)
        if not (ip_ok and name_ok):
            logger.warning(
                "Login throttled",
                client_ip=client_ip,
                ip_limited=not ip_ok,
                name_limited=not name_ok,
            )
            raise RateLimitError(
                message="Too many login attempts. Please wait and try again later."
            )
