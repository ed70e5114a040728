"""Session lifecycle: issue, resolve and revoke opaque tokens."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.core.config import settings
from chatwrapper.core.security import generate_session_token
from chatwrapper.models.user import User
from chatwrapper.repositories.session_repo import SessionRepository
from chatwrapper.repositories.user_repo import UserRepository


def utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SessionService:
    """Owns session rows; re-validates expiry and user existence on every lookup."""

    def __init__(
        self,
        session: AsyncSession,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session = session
        self._sessions = SessionRepository(session)
        self._users = UserRepository(session)
        self._now = now

    async def create(self, user_id: str, ttl: timedelta | None = None) -> str:
        """Issue a new token for ``user_id`` with an absolute expiry."""
        created_at = self._now()
        expires_at = created_at + (ttl if ttl is not None else settings.auth.session_ttl)
        token = generate_session_token()
        await self._sessions.create(
            token=token,
            user_id=user_id,
            created_at=created_at,
            expires_at=expires_at,
        )
        return token

    async def resolve(self, token: str | None) -> User | None:
        """Return the user behind ``token``, or None if it is unknown, expired or orphaned."""
        if not token:
            return None
        auth_session = await self._sessions.find_by_token(token)
        if auth_session is None:
            return None
        if self._now() >= _as_utc(auth_session.expires_at):
            await self._sessions.delete(token)
            # the caller usually fails auth next, which rolls the request back
            await self._session.commit()
            return None
        return await self._users.find_by_id(auth_session.user_id)

    async def invalidate(self, token: str) -> None:
        """Revoke a single token."""
        await self._sessions.delete(token)

    async def invalidate_all_for_user(self, user_id: str) -> None:
        """Revoke every token of a user."""
        await self._sessions.delete_all_for_user(user_id)
