from app.settings import Settings


def test_async_database_url_adds_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@db:5432/students")
    assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/students"


def test_cache_ttl_defaults_to_ten_seconds():
    assert Settings().cache_ttl_seconds == 10


def test_redis_url_accepts_legacy_variable(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.setenv("REDIS_CACHE_SERVER_URL", "redis://cache:6379/1")
    assert Settings().redis_url == "redis://cache:6379/1"
