"""User repository for database operations."""

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.models.user import User


class UserRepository:
    """Encapsulates user-related database queries."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_login_name(self, login_name: str) -> User | None:
        """Find a user by exact login name."""
        result = await self._session.execute(
            select(User).where(User.login_name == login_name)
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str) -> User | None:
        """Find a user by primary key."""
        result = await self._session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        """Return every user ordered by login name."""
        result = await self._session.execute(select(User).order_by(User.login_name))
        return list(result.scalars().all())

    async def create(
        self,
        user_id: str,
        display_name: str,
        login_name: str,
        password_hash: str,
        is_admin: bool = False,
    ) -> User:
        """Create a new user record."""
        user = User(
            id=user_id,
            display_name=display_name,
            login_name=login_name,
            password_hash=password_hash,
            is_admin=is_admin,
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def exists_by_login_name(self, login_name: str) -> bool:
        """Check if a user with this login name exists."""
        result = await self._session.execute(
            select(User.id).where(User.login_name == login_name)
        )
        return result.scalar_one_or_none() is not None

    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace a user's password hash."""
        await self._session.execute(
            update(User).where(User.id == user_id).values(password_hash=password_hash)
        )

    async def delete(self, user_id: str) -> None:
        """Hard-delete a user row."""
        await self._session.execute(delete(User).where(User.id == user_id))
