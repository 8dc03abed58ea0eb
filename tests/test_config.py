import pytest

from storefront.core.config import load_settings
from storefront.core.exceptions import ConfigurationException

ENV_VARS = (
    "STORAGE_BACKEND",
    "STORAGE_DIR",
    "REDIS_URL",
    "STORAGE_TTL_SECONDS",
    "API_HOST",
    "PORT",
    "MAX_SESSIONS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.setattr("storefront.core.config.load_dotenv", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()

    assert settings.storage.backend == "memory"
    assert settings.storage.directory == ".storefront"
    assert settings.storage.ttl_seconds == 30 * 24 * 60 * 60
    assert settings.api.port == 8080
    assert settings.api.max_sessions == 1024
    assert settings.log_level == "INFO"


def test_file_backend_from_env(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "File")
    monkeypatch.setenv("STORAGE_DIR", "/tmp/carts")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.storage.backend == "file"
    assert settings.storage.directory == "/tmp/carts"
    assert settings.api.port == 9000
    assert settings.log_level == "DEBUG"


def test_redis_backend_requires_url(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    with pytest.raises(ConfigurationException):
        load_settings()

    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    assert load_settings().storage.redis_url == "redis://localhost:6379/0"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("STORAGE_BACKEND", "sqlite"),
        ("PORT", "http"),
        ("STORAGE_TTL_SECONDS", "0"),
        ("MAX_SESSIONS", "0"),
    ],
)
def test_invalid_values_rejected(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationException):
        load_settings()
