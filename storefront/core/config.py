"""Environment-driven configuration objects for the storefront."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from storefront.core.constants import MAX_CACHED_SESSIONS, STORAGE_TTL_SECONDS
from storefront.core.exceptions import ConfigurationException

STORAGE_BACKENDS = ("memory", "file", "redis")


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationException(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class StorageConfig:
    backend: str
    directory: str
    redis_url: str | None
    ttl_seconds: int


@dataclass(slots=True)
class ApiConfig:
    host: str
    port: int
    max_sessions: int


@dataclass(slots=True)
class Settings:
    storage: StorageConfig
    api: ApiConfig
    log_level: str


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    backend = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ConfigurationException(
            f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}"
        )

    redis_url = os.getenv("REDIS_URL") or None
    if backend == "redis" and not redis_url:
        raise ConfigurationException("REDIS_URL environment variable is required for redis storage")

    ttl_seconds = _int_from_env("STORAGE_TTL_SECONDS", STORAGE_TTL_SECONDS)
    if ttl_seconds <= 0:
        raise ConfigurationException("STORAGE_TTL_SECONDS must be positive")

    storage = StorageConfig(
        backend=backend,
        directory=os.getenv("STORAGE_DIR", ".storefront"),
        redis_url=redis_url,
        ttl_seconds=ttl_seconds,
    )
    api = ApiConfig(
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=_int_from_env("PORT", 8080),
        max_sessions=_int_from_env("MAX_SESSIONS", MAX_CACHED_SESSIONS),
    )
    if api.max_sessions < 1:
        raise ConfigurationException("MAX_SESSIONS must be at least 1")

    return Settings(
        storage=storage,
        api=api,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
