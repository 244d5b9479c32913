"""Key-value store adapter over a synchronous Redis client.

Each method is one round trip. Nothing here spans more than one key, so callers that
write several keys do so as an explicit ordered sequence without atomicity.
"""

from __future__ import annotations

import json
from typing import Any

import redis
from redis.exceptions import RedisError

from quizapp.core.app_exceptions import StoreError
from quizapp.core.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore:
    """JSON values plus string sets on top of ``redis.Redis``.

    Every Redis failure and every undecodable value surfaces as ``StoreError``; whether
    that error is swallowed is the caller's decision.
    """

    def __init__(self, client: redis.Redis):
        self._client = client

    def _fail(self, op: str, key: str, exc: Exception) -> StoreError:
        logger.debug(
            "kv_call_failed",
            extra={"event": "kv_call_failed", "op": op, "key": key, "error": str(exc)},
        )
        return StoreError(f"Store {op} failed for {key}: {exc}", details={"key": key, "op": op})

    def get(self, key: str) -> Any | None:
        """Return the decoded JSON value at ``key``, or None if the key is missing."""
        try:
            raw = self._client.get(key)
        except RedisError as exc:
            raise self._fail("get", key, exc) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise self._fail("decode", key, exc) from exc

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise self._fail("encode", key, exc) from exc
        try:
            self._client.set(key, payload)
        except RedisError as exc:
            raise self._fail("set", key, exc) from exc

    def delete(self, key: str) -> int:
        """Delete ``key``. Returns the number of keys removed (0 or 1)."""
        try:
            return int(self._client.delete(key))
        except RedisError as exc:
            raise self._fail("delete", key, exc) from exc

    def set_add(self, key: str, member: str) -> None:
        try:
            self._client.sadd(key, member)
        except RedisError as exc:
            raise self._fail("sadd", key, exc) from exc

    def set_remove(self, key: str, member: str) -> None:
        try:
            self._client.srem(key, member)
        except RedisError as exc:
            raise self._fail("srem", key, exc) from exc

    def set_members(self, key: str) -> set[str]:
        """Members of the set at ``key``; a missing key is an empty set."""
        try:
            members = self._client.smembers(key)
        except RedisError as exc:
            raise self._fail("smembers", key, exc) from exc
        return {str(member) for member in members or ()}

    def set_size(self, key: str) -> int:
        try:
            return int(self._client.scard(key))
        except RedisError as exc:
            raise self._fail("scard", key, exc) from exc

    def ping(self) -> bool:
        """True when the store answers, False otherwise. Never raises."""
        try:
            return bool(self._client.ping())
        except RedisError as exc:
            logger.warning("kv_ping_failed", extra={"event": "kv_ping_failed", "error": str(exc)})
            return False
