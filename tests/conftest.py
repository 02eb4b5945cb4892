"""
Shared fixtures.

The app is pointed at in-memory SQLite before any folio module is imported,
so the module-level engine and settings never reach for PostgreSQL.
"""

import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ADMIN_EMAILS", json.dumps(["admin@example.com"]))

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from folio.api.dependencies.database import get_db
from folio.api.main import create_application
from folio.config.settings import settings
from folio.shared.models import Base
from folio.shared.services.auth_service import Principal
from folio.shared.services.document_service import DocumentService
from folio.shared.utils.security import SecurityUtils


class FakeClock:
    """Controllable clock: returns `now` until moved."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Let SQLAlchemy own BEGIN so SAVEPOINTs nest inside the outer transaction
    @event.listens_for(engine.sync_engine, "connect")
    def _connect(dbapi_connection, _record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(session, clock) -> DocumentService:
    return DocumentService(session, clock=clock)


# ═══════════════════════════════════════════════════════════════════════════════
# PRINCIPALS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def author() -> Principal:
    return Principal(user_id="user-ada", email="ada@example.com", name="Ada")


@pytest.fixture
def other_author() -> Principal:
    return Principal(user_id="user-grace", email="grace@example.com", name="Grace")


@pytest.fixture
def admin() -> Principal:
    return Principal(user_id="user-admin", email="admin@example.com", name="Admin", is_admin=True)


# ═══════════════════════════════════════════════════════════════════════════════
# API
# ═══════════════════════════════════════════════════════════════════════════════


def make_token(user_id: str, email: str, name: str = "Someone") -> str:
    return SecurityUtils.create_access_token(
        data={"user_id": user_id, "email": email, "name": name},
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def auth_headers(user_id: str = "user-ada", email: str = "ada@example.com") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    app = create_application()

    async def _test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
