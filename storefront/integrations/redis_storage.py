"""Redis-backed key-value storage with per-key TTL."""
from __future__ import annotations

import redis

from logging_config import logger
from storefront.core.constants import STORAGE_TTL_SECONDS
from storefront.core.exceptions import StorageException


class RedisStorage:
    """Storage adapter persisting records in Redis.

    Records are written with SETEX so abandoned sessions expire on their own;
    every write refreshes the TTL.
    """

    KEY_PREFIX = "storefront:"

    def __init__(self, redis_url: str | None, ttl_seconds: int = STORAGE_TTL_SECONDS):
        if not redis_url:
            raise StorageException("redis", "REDIS_URL is not set")
        self._redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self._client = self._init_client()

    def _init_client(self):
        try:
            client = redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            client.ping()
        except redis.RedisError as exc:
            logger.error("Redis storage init failed: %s", exc)
            raise StorageException("redis", exc) from exc
        logger.info("Redis storage enabled")
        return client

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def _key(self, key: str) -> str:
        return self.KEY_PREFIX + key

    def get_item(self, key: str) -> str | None:
        try:
            return self._client.get(self._key(key))
        except redis.RedisError as exc:
            raise StorageException(key, exc) from exc

    def set_item(self, key: str, value: str) -> None:
        try:
            self._client.setex(self._key(key), self._ttl_seconds, value)
        except redis.RedisError as exc:
            raise StorageException(key, exc) from exc

    def remove_item(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as exc:
            raise StorageException(key, exc) from exc
