import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["EMAIL_BACKEND"] = "console"

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.main import app
from app.api.deps import get_clock, get_email_sender
from app.core.events import AuthStateNotifier
from app.db.database import Base, get_db
from app.models import User, PasswordResetOTP  # noqa: F401 - register with Base
from app.repositories.user_repo import UserRepository
from app.services.password_reset_service import PasswordResetService


class FakeClock:
    """Controllable replacement for utcnow()."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class FakeEmailSender:
    """Records reset emails instead of sending them."""

    def __init__(self):
        self.sent: list[dict] = []
        self.fail_with: Exception | None = None

    async def __call__(self, email: str, code: str, expires_in_minutes: int) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(
            {"email": email, "code": code, "expires_in_minutes": expires_in_minutes}
        )

    @property
    def last_code(self) -> str:
        return self.sent[-1]["code"]


def naive(value: datetime) -> datetime:
    """SQLite hands datetimes back without tzinfo."""
    return value.replace(tzinfo=None)


async def make_user(session, email: str, user_type: str = "gym_goer", full_name: str = "Sam Rivera") -> User:
    return await UserRepository(session).create_user(
        email=email, password="secret1", full_name=full_name, user_type=user_type
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def events() -> AuthStateNotifier:
    return AuthStateNotifier()


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def reset_service(db_session, events, email_sender, clock) -> PasswordResetService:
    return PasswordResetService(
        db_session,
        events=events,
        email_sender=email_sender,
        clock=clock,
    )


@pytest_asyncio.fixture
async def async_client(session_factory, email_sender, clock) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
