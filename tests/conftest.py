"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("GLOBAL_RATE_LIMIT", "100000/minute")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from langchain_core.language_models import BaseChatModel  # noqa: E402
from langchain_core.messages import AIMessage  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from chatwrapper.core.database import Base  # noqa: E402
from chatwrapper.core.rate_limit import FixedWindowRateLimiter  # noqa: E402
from chatwrapper.core.security import hash_password  # noqa: E402
from chatwrapper.models.message import Message  # noqa: E402, F401
from chatwrapper.models.session import AuthSession  # noqa: E402, F401
from chatwrapper.models.usage_record import UsageRecord  # noqa: E402, F401
from chatwrapper.models.user import User  # noqa: E402
from chatwrapper.services.completion_service import CompletionClient  # noqa: E402

TEST_MODEL = "gpt-4o-mini"
DEFAULT_PASSWORD = "password123"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# --- Test DB (SQLite in-memory, one engine per test) ---


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a raw async session for repository and service tests."""
    async with session_factory() as session:
        yield session


# --- Process-local collaborators ---


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> FixedWindowRateLimiter:
    """Isolated limiter driven by the fake clock."""
    return FixedWindowRateLimiter(clock=clock)


# --- Mock LLM ---


def make_ai_message(
    content: str = "Test response",
    input_tokens: int = 12,
    output_tokens: int = 8,
) -> AIMessage:
    """AIMessage carrying usage metadata like a real provider response."""
    return AIMessage(
        content=content,
        usage_metadata={
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        },
    )


@pytest.fixture
def mock_llm() -> MagicMock:
    """Create a mock LLM for testing."""
    mock = MagicMock(spec=BaseChatModel)
    mock.ainvoke = AsyncMock(return_value=make_ai_message())
    return mock


@pytest.fixture
def completion_client(mock_llm: MagicMock) -> CompletionClient:
    return CompletionClient(llm=mock_llm, model_name=TEST_MODEL)


# --- Users ---


@pytest.fixture
def create_user(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[User]]:
    """Insert a user row directly and return it."""

    async def _create(
        login_name: str = "alice",
        password: str = DEFAULT_PASSWORD,
        is_admin: bool = False,
        display_name: str | None = None,
        user_id: str | None = None,
    ) -> User:
        async with session_factory() as session:
            user = User(
                id=user_id or f"id-{login_name}",
                display_name=display_name or login_name.title(),
                login_name=login_name,
                password_hash=await hash_password(password),
                is_admin=is_admin,
            )
            session.add(user)
            await session.commit()
            return user

    return _create


# --- App override & client fixtures ---


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    rate_limiter: FixedWindowRateLimiter,
    completion_client: CompletionClient,
):  # type: ignore[no-untyped-def]
    """Import app lazily and point its dependencies at the test doubles."""
    from chatwrapper.core.database import get_async_session
    from chatwrapper.dependencies import get_completion_client, get_rate_limiter
    from chatwrapper.main import app as application

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    application.dependency_overrides[get_async_session] = override_get_async_session
    application.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    application.dependency_overrides[get_completion_client] = lambda: completion_client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client_factory(app) -> AsyncGenerator[Callable[[], AsyncClient], None]:  # type: ignore[no-untyped-def]
    """Build independent clients (separate cookie jars) against the test app."""
    clients: list[AsyncClient] = []

    def _make() -> AsyncClient:
        transport = ASGITransport(app=app)
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
async def async_client(client_factory: Callable[[], AsyncClient]) -> AsyncClient:
    """Anonymous client."""
    return client_factory()


async def login(client: AsyncClient, login_name: str, password: str = DEFAULT_PASSWORD):  # type: ignore[no-untyped-def]
    """Log in through the API; the client's cookie jar keeps the session."""
    return await client.post(
        "/api/auth/login",
        json={"loginName": login_name, "password": password},
    )


@pytest.fixture
async def user_client(
    client_factory: Callable[[], AsyncClient],
    create_user: Callable[..., Awaitable[User]],
) -> AsyncClient:
    """Client logged in as regular user 'alice'."""
    await create_user("alice", display_name="Alice")
    client = client_factory()
    resp = await login(client, "alice")
    assert resp.status_code == 200
    return client


@pytest.fixture
async def admin_client(
    client_factory: Callable[[], AsyncClient],
    create_user: Callable[..., Awaitable[User]],
) -> AsyncClient:
    """Client logged in as admin 'root'."""
    await create_user("root", is_admin=True, display_name="Root", user_id="id-root")
    client = client_factory()
    resp = await login(client, "root")
    assert resp.status_code == 200
    return client
