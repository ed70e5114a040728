"""Admin user management."""

import uuid

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.core.exceptions import (
    LoginNameTakenError,
    SelfDeleteError,
    UserNotFoundError,
)
from chatwrapper.core.security import hash_password
from chatwrapper.models.user import User
from chatwrapper.repositories.user_repo import UserRepository
from chatwrapper.schemas.admin_schema import CreateUserRequest
from chatwrapper.services.session_service import SessionService

logger = structlog.get_logger()


class AdminService:
    """Lists, creates and deletes accounts on behalf of an admin."""

    def __init__(
        self,
        user_repo: UserRepository,
        session_service: SessionService,
        session: AsyncSession,
    ) -> None:
        self._user_repo = user_repo
        self._session_service = session_service
        self._session = session

    async def list_users(self) -> list[User]:
        return await self._user_repo.list_all()

    async def create_user(self, request: CreateUserRequest) -> User:
        """Create an account; login names are unique."""
        if await self._user_repo.exists_by_login_name(request.login_name):
            raise LoginNameTakenError

        password_hash = await hash_password(request.password)
        try:
            user = await self._user_repo.create(
                user_id=uuid.uuid4().hex,
                display_name=request.display_name or request.login_name,
                login_name=request.login_name,
                password_hash=password_hash,
                is_admin=request.is_admin,
            )
            await self._session.commit()
        except IntegrityError:
            # a concurrent create claimed the name after the check above
            await self._session.rollback()
            raise LoginNameTakenError from None

        logger.info(
            "User created",
            user_id=user.id,
            login_name=user.login_name,
            is_admin=user.is_admin,
        )
        return user

    async def delete_user(self, acting_user_id: str, user_id: str) -> None:
        """Delete an account and all of its sessions."""
        if acting_user_id == user_id:
            raise SelfDeleteError

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError

        await self._session_service.invalidate_all_for_user(user.id)
        await self._user_repo.delete(user.id)
        await self._session.commit()

        logger.info("User deleted", user_id=user_id, deleted_by=acting_user_id)
