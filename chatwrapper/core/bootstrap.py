"""First-start account provisioning."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.core.security import generate_password, hash_password
from chatwrapper.repositories.user_repo import UserRepository

logger = structlog.get_logger()

BOOTSTRAP_ADMIN_ID = "admin"
BOOTSTRAP_ADMIN_LOGIN = "admin"
BOOTSTRAP_ADMIN_DISPLAY_NAME = "Administrator"


async def ensure_bootstrap_admin(session: AsyncSession) -> str | None:
    """Create the initial admin when the user table is empty.

    The generated password is printed once for the operator and returned;
    only its hash is stored. Returns None when users already exist.
    """
    repo = UserRepository(session)
    if await repo.list_all():
        return None

    password = generate_password()
    await repo.create(
        user_id=BOOTSTRAP_ADMIN_ID,
        display_name=BOOTSTRAP_ADMIN_DISPLAY_NAME,
        login_name=BOOTSTRAP_ADMIN_LOGIN,
        password_hash=await hash_password(password),
        is_admin=True,
    )
    await session.commit()

    logger.warning("Initial admin user created", login_name=BOOTSTRAP_ADMIN_LOGIN)
    print("### Initial admin user created ###")
    print(f"   login name: {BOOTSTRAP_ADMIN_LOGIN}")
    print(f"   password:   {password}")
    print("Please change this password after first login.")
    return password
