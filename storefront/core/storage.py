"""Key-value storage port used by the stores, with local adapters.

Every adapter stores opaque JSON text under a string key, the way browser
local storage does. Failures are wrapped in ``StorageException`` and left
to propagate to the caller.
"""
from __future__ import annotations

import os
import tempfile
import urllib.parse
from pathlib import Path
from typing import Protocol, runtime_checkable

from logging_config import logger
from storefront.core.config import Settings
from storefront.core.exceptions import ConfigurationException, StorageException


@runtime_checkable
class KeyValueStorage(Protocol):
    """Minimal storage interface the stores persist through."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage. Lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileStorage:
    """One file per key inside a directory on local disk."""

    SUFFIX = ".json"

    def __init__(self, directory: str | os.PathLike[str]):
        self._directory = Path(directory)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageException(str(self._directory), exc) from exc

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        name = urllib.parse.quote(key, safe="", errors="surrogatepass")
        return self._directory / (name + self.SUFFIX)

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageException(key, exc) from exc

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            # Write to a sibling temp file and rename so readers never see a partial record
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self._directory, delete=False, suffix=".tmp"
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(value)
            os.replace(tmp_name, path)
        except (OSError, UnicodeError) as exc:
            raise StorageException(key, exc) from exc
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageException(key, exc) from exc


class NamespacedStorage:
    """Prefixes every key so several sessions can share one backend."""

    def __init__(self, storage: KeyValueStorage, namespace: str):
        if not namespace:
            raise ValueError("namespace must be a non-empty string")
        self._storage = storage
        self._prefix = f"session:{namespace}:"

    def _key(self, key: str) -> str:
        return self._prefix + key

    def get_item(self, key: str) -> str | None:
        return self._storage.get_item(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self._storage.set_item(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self._storage.remove_item(self._key(key))


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the storage adapter selected by configuration."""
    config = settings.storage
    if config.backend == "memory":
        logger.info("Using in-memory storage")
        return MemoryStorage()
    if config.backend == "file":
        logger.info("Using file storage in %s", config.directory)
        return FileStorage(config.directory)
    if config.backend == "redis":
        from storefront.integrations.redis_storage import RedisStorage

        return RedisStorage(redis_url=config.redis_url, ttl_seconds=config.ttl_seconds)
    raise ConfigurationException(f"Unknown storage backend: {config.backend}")
