"""JSON-valued cache on top of a Redis-style client."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any


class CacheError(Exception):
    """Raised when a cache operation fails or a key is missing."""


def _encode(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def _expiry_kwargs(expiration: timedelta | float | None) -> dict[str, int]:
    if expiration is None:
        return {}
    if not isinstance(expiration, timedelta):
        expiration = timedelta(seconds=expiration)
    if expiration <= timedelta(0):
        return {}
    millis = max(1, expiration // timedelta(milliseconds=1))
    if millis % 1000 == 0:
        return {"ex": millis // 1000}
    return {"px": millis}


def _text(value: Any) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


class CacheManager:
    """Stores JSON values, strings, hashes and counters in a Redis-style client.

    The client is expected to offer the redis-py methods ``set``, ``get``,
    ``delete``, ``exists``, ``hset``, ``hgetall`` and ``incrby``. With no
    client, every operation raises CacheError.
    """

    def __init__(self, client: Any = None) -> None:
        self._client = client

    @contextmanager
    def _operation(self, action: str) -> Iterator[Any]:
        if self._client is None:
            raise CacheError("cache client is not configured")
        try:
            yield self._client
        except CacheError:
            raise
        except Exception as exc:
            raise CacheError(f"{action} failed: {exc}") from exc

    def set(self, key: str, value: Any, expiration: timedelta | float | None = None) -> None:
        """Store ``value`` as JSON under ``key``."""
        if self._client is None:
            raise CacheError("cache client is not configured")
        try:
            payload = json.dumps(value, default=_encode)
        except (TypeError, ValueError) as exc:
            raise CacheError(f"failed to marshal value: {exc}") from exc
        with self._operation("set") as client:
            client.set(key, payload, **_expiry_kwargs(expiration))

    def get(self, key: str) -> Any:
        """Return the JSON value stored under ``key``."""
        raw = self.get_string(key)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CacheError(f"failed to unmarshal value for key {key!r}: {exc}") from exc

    def delete(self, *args: str) -> int:
        """Remove the given keys and return how many existed."""
        with self._operation("delete") as client:
            return int(client.delete(*args))

    def exists(self, key: str) -> bool:
        with self._operation("exists") as client:
            return int(client.exists(key)) > 0

    def set_string(self, key: str, value: str, expiration: timedelta | float | None = None) -> None:
        with self._operation("set") as client:
            client.set(key, value, **_expiry_kwargs(expiration))

    def get_string(self, key: str) -> str:
        with self._operation("get") as client:
            raw = client.get(key)
        if raw is None:
            raise CacheError(f"cache miss for key {key!r}")
        return _text(raw)

    def set_hash(self, key: str, values: Mapping[str, Any]) -> None:
        with self._operation("hset") as client:
            client.hset(key, mapping=dict(values))

    def get_hash_all(self, key: str) -> dict[str, str]:
        with self._operation("hgetall") as client:
            raw = client.hgetall(key)
        return {_text(field): _text(value) for field, value in raw.items()}

    def incr_by(self, key: str, increment: int) -> int:
        with self._operation("incrby") as client:
            return int(client.incrby(key, increment))