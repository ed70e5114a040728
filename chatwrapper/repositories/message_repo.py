"""Message repository for the per-user conversation log."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.models.message import Message


class MessageRepository:
    """Append-only access to conversation messages."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, user_id: str, role: str, content: str) -> Message:
        """Append a message to the user's log."""
        message = Message(user_id=user_id, role=role, content=content)
        self._session.add(message)
        await self._session.flush()
        return message

    async def find_recent(self, user_id: str, limit: int) -> list[Message]:
        """Return the ``limit`` newest messages, oldest first."""
        if limit <= 0:
            return []
        result = await self._session.execute(
            select(Message)
            .where(Message.user_id == user_id)
            .order_by(Message.id.desc())
            .limit(limit)
        )
        rows = list(result.scalars().all())
        rows.reverse()
        return rows

    async def find_all(self, user_id: str) -> list[Message]:
        """Return the user's full log in chronological order."""
        result = await self._session.execute(
            select(Message).where(Message.user_id == user_id).order_by(Message.id.asc())
        )
        return list(result.scalars().all())
