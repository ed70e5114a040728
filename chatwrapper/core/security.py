"""Password hashing and secret generation."""

import asyncio
import secrets
from concurrent.futures import ThreadPoolExecutor

import bcrypt

from chatwrapper.core.config import settings

_executor = ThreadPoolExecutor(max_workers=4)

SESSION_TOKEN_BYTES = 32
GENERATED_PASSWORD_LENGTH = 16

DUMMY_HASH = bcrypt.hashpw(
    b"dummy", bcrypt.gensalt(rounds=settings.auth.bcrypt_rounds)
).decode()


async def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    loop = asyncio.get_running_loop()
    rounds = settings.auth.bcrypt_rounds
    return await loop.run_in_executor(
        _executor,
        lambda: bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode(),
    )


async def verify_password(plain: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        _executor,
        lambda: bcrypt.checkpw(plain.encode(), hashed.encode()),
    )


def generate_session_token() -> str:
    """Return an opaque session token carrying 256 random bits."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    """Return a random URL-safe password for bootstrap accounts."""
    return secrets.token_urlsafe(length)[:length]
