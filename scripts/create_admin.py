"""Create an admin user, or reset the password of an existing login.

Usage:
    python -m scripts.create_admin --login-name admin --password 'new-secret'
    python -m scripts.create_admin --login-name alice --password 's3cret!!' --no-admin
"""

import argparse
import asyncio
import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chatwrapper.core.database import async_session_factory, engine, init_models
from chatwrapper.core.security import hash_password
from chatwrapper.repositories.user_repo import UserRepository
from chatwrapper.services.session_service import SessionService


async def create_or_reset(
    login_name: str,
    password: str,
    display_name: str | None = None,
    is_admin: bool = True,
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> str:
    """Create the account, or reset its password and revoke its sessions.

    Returns the affected user's id.
    """
    async with session_factory() as session:
        repo = UserRepository(session)
        password_hash = await hash_password(password)
        existing = await repo.find_by_login_name(login_name)
        if existing is not None:
            await repo.update_password_hash(existing.id, password_hash)
            await SessionService(session).invalidate_all_for_user(existing.id)
            await session.commit()
            print(f"Password reset for '{login_name}' (id={existing.id}).")
            return existing.id

        user = await repo.create(
            user_id=uuid.uuid4().hex,
            display_name=display_name or login_name,
            login_name=login_name,
            password_hash=password_hash,
            is_admin=is_admin,
        )
        await session.commit()
        print(f"User created: {login_name} (id={user.id}, admin={is_admin})")
        return user.id


async def _main(args: argparse.Namespace) -> None:
    await init_models()
    try:
        await create_or_reset(
            login_name=args.login_name,
            password=args.password,
            display_name=args.display_name,
            is_admin=args.admin,
        )
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create an admin user or reset a password")
    parser.add_argument("--login-name", required=True, help="Login name")
    parser.add_argument("--password", required=True, help="New password")
    parser.add_argument("--display-name", default=None, help="Display name for new users")
    parser.add_argument(
        "--no-admin",
        dest="admin",
        action="store_false",
        help="Create a regular user instead of an admin",
    )
    args = parser.parse_args()

    asyncio.run(_main(args))


if __name__ == "__main__":
    main()
