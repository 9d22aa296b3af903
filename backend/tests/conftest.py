"""
PURPOSE: Pytest fixtures for Signal Sync tests.

Provides shared test doubles and data including:
- Async in-memory SQLite session factory with all tables created
- Test configuration settings
- FakeRedis: in-memory async Redis stand-in with a controllable clock
- A counting SignalStore for cache-aside assertions
- Signal builders for the pure correlation/categorizer tests
- An httpx client bound to a fully wired application
"""

from datetime import date, datetime, timedelta, timezone
from itertools import count
from typing import Dict, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.config.constants import SignalSource
from app.config.settings import Settings
from app.core.rate_limit import limiter
from app.db.base import Base
from app.db.engine import create_session_factory
from app.schemas.signal import SignalRecord
from app.services.signal_store import SignalStore


TEST_DAY = date(2026, 10, 19)
TEST_NOW = datetime(2026, 10, 19, 9, 15, 0, tzinfo=timezone.utc)


class FakeRedis:
    """
    PURPOSE: Minimal async Redis stand-in supporting get/set(ex)/ping/aclose.

    Expiry is evaluated against an internal clock moved with advance(), so
    TTL behaviour can be tested without sleeping. Setting `fail` makes every
    command raise a redis ConnectionError.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self.now: float = 0.0
        self.fail: bool = False
        self.set_calls: int = 0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Connection refused")

    async def get(self, key: str) -> Optional[str]:
        self._check()
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        self._check()
        self.set_calls += 1
        self._data[key] = (value, self.now + ex if ex is not None else None)
        return True

    async def ping(self) -> bool:
        self._check()
        return True

    async def aclose(self) -> None:
        self._data.clear()


class CountingSignalStore(SignalStore):
    """SignalStore that counts query_signals calls."""

    def __init__(self, session_factory) -> None:
        super().__init__(session_factory)
        self.query_calls = 0

    async def query_signals(self, *args, **kwargs):
        self.query_calls += 1
        return await super().query_signals(*args, **kwargs)


_ids = count(1)


def make_signal(
    symbol: str,
    source: SignalSource,
    reason: str = "breakout",
    minutes: int = 0,
    capital: Optional[float] = None,
) -> SignalRecord:
    """Build a SignalRecord created `minutes` after TEST_NOW."""
    created_at = TEST_NOW + timedelta(minutes=minutes)
    return SignalRecord(
        id=next(_ids),
        source=source,
        symbol=symbol,
        reason=reason,
        capital=capital,
        date=created_at.date(),
        time=created_at.time(),
        created_at=created_at,
    )


@pytest_asyncio.fixture
async def session_factory():
    """
    PURPOSE: In-memory SQLite session factory for testing.

    StaticPool keeps a single connection so every session sees the same
    in-memory database. Tables are created from the ORM metadata.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    from app.models import Signal, DebugLog  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield create_session_factory(engine)

    await engine.dispose()


@pytest_asyncio.fixture
async def store(session_factory):
    return CountingSignalStore(session_factory)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def test_settings():
    """
    PURPOSE: Settings override with test values.

    Returns:
        Settings: Configuration object with test values.
    """
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        REDIS_URL="redis://localhost:6379/1",
        DASHBOARD_CACHE_KEY="dashboardData:test",
        DASHBOARD_CACHE_TTL_SECONDS=60,
        APP_ENV="test",
        DEBUG=False,
        LOG_LEVEL="DEBUG",
        RUN_MIGRATIONS_ON_STARTUP=False,
    )


@pytest.fixture
def no_rate_limit():
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


@pytest_asyncio.fixture
async def api_app(test_settings, session_factory, fake_redis, no_rate_limit):
    """
    PURPOSE: Application wired to SQLite and FakeRedis without running the lifespan.
    """
    from app.main import create_app, wire_services

    application = create_app(test_settings)
    wire_services(application, session_factory, fake_redis)
    return application


@pytest_asyncio.fixture
async def client(api_app):
    transport = httpx.ASGITransport(app=api_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
