"""Session repository for login session rows."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.models.session import AuthSession


class SessionRepository:
    """Encapsulates session token queries."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        token: str,
        user_id: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> AuthSession:
        """Insert a session row."""
        auth_session = AuthSession(
            token=token,
            user_id=user_id,
            created_at=created_at,
            expires_at=expires_at,
        )
        self._session.add(auth_session)
        await self._session.flush()
        return auth_session

    async def find_by_token(self, token: str) -> AuthSession | None:
        """Find a session by its token."""
        result = await self._session.execute(
            select(AuthSession).where(AuthSession.token == token)
        )
        return result.scalar_one_or_none()

    async def delete(self, token: str) -> None:
        """Remove a single session."""
        await self._session.execute(delete(AuthSession).where(AuthSession.token == token))

    async def delete_all_for_user(self, user_id: str) -> None:
        """Remove every session belonging to a user."""
        await self._session.execute(
            delete(AuthSession).where(AuthSession.user_id == user_id)
        )
