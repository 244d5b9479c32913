"""In-memory stand-in for the subset of ``redis.Redis`` the store adapter calls."""

from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """Strings and sets in dicts, with per-(op, key) failure injection.

    ``fail(op, key)`` makes the next and all later ``op`` calls on ``key`` raise a
    ``redis`` ConnectionError; ``key=None`` fails the op on every key.
    """

    def __init__(self):
        self.strings: dict[str, str] = {}
        self.sets: dict[str, set[str]] = {}
        self.calls: list[tuple[str, str]] = []
        self._failures: set[tuple[str, str | None]] = set()
        self.down = False

    def fail(self, op: str, key: str | None = None) -> None:
        self._failures.add((op, key))

    def _check(self, op: str, key: str) -> None:
        self.calls.append((op, key))
        if self.down or (op, key) in self._failures or (op, None) in self._failures:
            raise RedisConnectionError(f"injected failure: {op} {key}")

    def get(self, key):
        self._check("get", key)
        return self.strings.get(key)

    def set(self, key, value):
        self._check("set", key)
        self.strings[key] = value
        return True

    def delete(self, key):
        self._check("delete", key)
        removed = 0
        if self.strings.pop(key, None) is not None:
            removed += 1
        if self.sets.pop(key, None) is not None:
            removed += 1
        return removed

    def sadd(self, key, *members):
        self._check("sadd", key)
        bucket = self.sets.setdefault(key, set())
        before = len(bucket)
        bucket.update(members)
        return len(bucket) - before

    def srem(self, key, *members):
        self._check("srem", key)
        bucket = self.sets.get(key, set())
        removed = len(bucket & set(members))
        bucket.difference_update(members)
        if not bucket:
            self.sets.pop(key, None)
        return removed

    def smembers(self, key):
        self._check("smembers", key)
        return set(self.sets.get(key, set()))

    def scard(self, key):
        self._check("scard", key)
        return len(self.sets.get(key, set()))

    def ping(self):
        self._check("ping", "")
        return True
