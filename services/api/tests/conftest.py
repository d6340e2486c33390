"""Shared fixtures: SQLite-backed stores and an in-memory Redis double.

Every test that asks for `db` gets a fresh SQLite file database wired into
`app.stores.postgres`. Tests that ask for `cache` get a Redis stand-in with a
manual clock installed as the module-level client of `app.stores.redis`.
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

import app.stores.redis as redis_store
from app.stores.postgres import close_db, create_tables, drop_tables, init_db


class InMemoryRedis:
    """Subset of the redis.asyncio client used by the cache layer."""

    def __init__(self) -> None:
        self.now = 0.0
        self._data: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.now >= expires_at:
            del self._data[key]
            return None
        return value

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self._data[key] = (value, self.now + ttl)
        return True

    async def delete(self, key: str) -> int:
        return 1 if self._data.pop(key, None) is not None else 0

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self._data.clear()

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def keys(self) -> list[str]:
        return list(self._data)


class UnreachableRedis:
    """Redis client whose every call fails like a dropped connection."""

    async def get(self, key: str) -> str | None:
        raise RedisConnectionError("connection refused")

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        raise RedisConnectionError("connection refused")

    async def delete(self, key: str) -> int:
        raise RedisConnectionError("connection refused")


@pytest.fixture
async def db(tmp_path):
    """Fresh SQLite database for the duration of one test."""
    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'students.db'}")
    await create_tables()
    yield
    await drop_tables()
    await close_db()


@pytest.fixture
def cache(monkeypatch: pytest.MonkeyPatch) -> InMemoryRedis:
    fake = InMemoryRedis()
    monkeypatch.setattr(redis_store, "_redis", fake)
    return fake


@pytest.fixture
def unreachable_cache(monkeypatch: pytest.MonkeyPatch) -> UnreachableRedis:
    broken = UnreachableRedis()
    monkeypatch.setattr(redis_store, "_redis", broken)
    return broken
