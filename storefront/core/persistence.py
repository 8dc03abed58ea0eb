"""Versioned JSON records on top of the key-value storage port.

Records are written as ``{"state": {...}, "version": N}``. Older records
(version 0, or a bare state without the envelope) are upgraded through the
registered migrations on load.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from logging_config import logger
from storefront.core.constants import SCHEMA_VERSION
from storefront.core.exceptions import SchemaVersionException
from storefront.core.storage import KeyValueStorage

StateT = TypeVar("StateT", bound=BaseModel)

Migration = Callable[[dict[str, Any]], dict[str, Any]]


def _unwrap(payload: Any) -> tuple[Any, int]:
    if isinstance(payload, dict) and "state" in payload and "version" in payload:
        return payload["state"], payload["version"]
    return payload, 0


class PersistedRecord(Generic[StateT]):
    """One store's state under one storage key."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        model: type[StateT],
        version: int = SCHEMA_VERSION,
        migrations: dict[int, Migration] | None = None,
    ):
        self._storage = storage
        self._key = key
        self._model = model
        self._version = version
        # migrations[n] upgrades a version-n state to version n + 1
        self._migrations = migrations or {}

    @property
    def key(self) -> str:
        return self._key

    def _migrate(self, state: dict[str, Any], version: int) -> dict[str, Any]:
        while version < self._version:
            migration = self._migrations.get(version)
            if migration is not None:
                state = migration(state)
            logger.debug("Migrated %s from version %s", self._key, version)
            version += 1
        return state

    def load(self) -> StateT:
        """Read, upgrade and validate the record; defaults when absent or invalid."""
        raw = self._storage.get_item(self._key)
        if raw is None:
            return self._model()

        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("Discarding unreadable record %s: %s", self._key, exc)
            return self._model()

        state, version = _unwrap(payload)
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            logger.warning("Discarding record %s with invalid version %r", self._key, version)
            return self._model()
        if version > self._version:
            raise SchemaVersionException(self._key, version, self._version)
        if not isinstance(state, dict):
            logger.warning("Discarding record %s: state is not an object", self._key)
            return self._model()

        state = self._migrate(state, version)
        try:
            return self._model.model_validate(state)
        except ValidationError as exc:
            logger.warning(
                "Discarding invalid record %s (%s errors)", self._key, exc.error_count()
            )
            return self._model()

    def save(self, state: StateT) -> None:
        payload = {"state": state.model_dump(mode="json"), "version": self._version}
        self._storage.set_item(self._key, json.dumps(payload))

    def clear(self) -> None:
        self._storage.remove_item(self._key)
