"""Tests for first-start admin provisioning and the operator script."""

from collections.abc import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chatwrapper.core.bootstrap import ensure_bootstrap_admin
from chatwrapper.core.security import verify_password
from chatwrapper.models.user import User
from chatwrapper.repositories.user_repo import UserRepository
from chatwrapper.services.session_service import SessionService
from scripts.create_admin import create_or_reset


class TestBootstrapAdmin:
    async def test_creates_admin_on_empty_store(
        self, db_session: AsyncSession, capsys: pytest.CaptureFixture[str]
    ) -> None:
        password = await ensure_bootstrap_admin(db_session)

        assert password is not None
        assert len(password) == 16
        users = await UserRepository(db_session).list_all()
        assert len(users) == 1
        admin = users[0]
        assert admin.id == "admin"
        assert admin.login_name == "admin"
        assert admin.display_name == "Administrator"
        assert admin.is_admin is True
        assert admin.password_hash != password
        assert await verify_password(password, admin.password_hash)
        assert password in capsys.readouterr().out

    async def test_runs_once(self, db_session: AsyncSession) -> None:
        assert await ensure_bootstrap_admin(db_session) is not None
        assert await ensure_bootstrap_admin(db_session) is None
        assert len(await UserRepository(db_session).list_all()) == 1

    async def test_skipped_when_users_exist(
        self,
        db_session: AsyncSession,
        create_user: Callable[..., Awaitable[User]],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        await create_user("alice")
        assert await ensure_bootstrap_admin(db_session) is None
        assert await UserRepository(db_session).find_by_login_name("admin") is None
        assert capsys.readouterr().out == ""


class TestCreateAdminScript:
    async def test_creates_admin(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        db_session: AsyncSession,
    ) -> None:
        user_id = await create_or_reset(
            "ops", "s3cret-pass", session_factory=session_factory
        )
        user = await UserRepository(db_session).find_by_id(user_id)
        assert user is not None
        assert user.login_name == "ops"
        assert user.display_name == "ops"
        assert user.is_admin is True

    async def test_creates_regular_user(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        db_session: AsyncSession,
    ) -> None:
        user_id = await create_or_reset(
            "bob",
            "s3cret-pass",
            display_name="Bob",
            is_admin=False,
            session_factory=session_factory,
        )
        user = await UserRepository(db_session).find_by_id(user_id)
        assert user is not None
        assert user.display_name == "Bob"
        assert user.is_admin is False

    async def test_resets_existing_password_and_sessions(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        db_session: AsyncSession,
        create_user: Callable[..., Awaitable[User]],
    ) -> None:
        alice = await create_user("alice")
        token = await SessionService(db_session).create(alice.id)
        await db_session.commit()

        user_id = await create_or_reset(
            "alice", "reset-pass", session_factory=session_factory
        )

        assert user_id == alice.id
        db_session.expire_all()
        stored = await UserRepository(db_session).find_by_id(alice.id)
        assert stored is not None
        assert await verify_password("reset-pass", stored.password_hash)
        assert await SessionService(db_session).resolve(token) is None
