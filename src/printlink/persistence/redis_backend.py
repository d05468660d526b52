"""Redis settings backend implementing ISettingsStore."""

from __future__ import annotations

import redis

from printlink.core.exceptions import StorageError


class RedisSettingsStore:
    """Production ISettingsStore backed by Redis string keys."""

    KEY_PREFIX = "printlink:setting:"

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}{key}"

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(self._key(key))
        except Exception as exc:
            raise StorageError(f"Redis GET failed for setting={key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except Exception as exc:
            raise StorageError(f"Redis SET failed for setting={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except Exception as exc:
            raise StorageError(f"Redis DELETE failed for setting={key!r}: {exc}") from exc
