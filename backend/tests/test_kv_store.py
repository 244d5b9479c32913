"""Tests for the key-value store adapter."""

from unittest.mock import MagicMock

import pytest
from redis.exceptions import TimeoutError as RedisTimeoutError

from quizapp.core.app_exceptions import StoreError
from quizapp.store import keys
from quizapp.store.kv import KeyValueStore


def test_json_values_round_trip(store, fake_redis):
    store.set("test:abc", {"title": "Quiz", "questions": []})

    assert fake_redis.strings["test:abc"] == '{"title": "Quiz", "questions": []}'
    assert store.get("test:abc") == {"title": "Quiz", "questions": []}


def test_missing_key_reads_as_none(store):
    assert store.get("test:nope") is None


def test_undecodable_value_is_store_error(store, fake_redis):
    fake_redis.strings["test:bad"] = "{not json"

    with pytest.raises(StoreError) as exc_info:
        store.get("test:bad")
    assert exc_info.value.details == {"key": "test:bad", "op": "decode"}


def test_sets(store):
    store.set_add("test:ids", "a")
    store.set_add("test:ids", "b")
    store.set_add("test:ids", "a")
    assert store.set_members("test:ids") == {"a", "b"}
    assert store.set_size("test:ids") == 2

    store.set_remove("test:ids", "a")
    assert store.set_members("test:ids") == {"b"}


def test_missing_set_is_empty(store):
    assert store.set_members("test:none:results") == set()
    assert store.set_size("test:none:results") == 0


def test_delete_reports_removed_count(store):
    store.set("k", 1)
    assert store.delete("k") == 1
    assert store.delete("k") == 0


@pytest.mark.parametrize(
    "op,call",
    [
        ("get", lambda s: s.get("k")),
        ("set", lambda s: s.set("k", 1)),
        ("delete", lambda s: s.delete("k")),
        ("sadd", lambda s: s.set_add("k", "m")),
        ("srem", lambda s: s.set_remove("k", "m")),
        ("smembers", lambda s: s.set_members("k")),
        ("scard", lambda s: s.set_size("k")),
    ],
)
def test_redis_failures_become_store_errors(store, fake_redis, op, call):
    fake_redis.fail(op, "k")

    with pytest.raises(StoreError) as exc_info:
        call(store)
    assert exc_info.value.details["op"] == op


def test_unencodable_value_is_store_error(store):
    with pytest.raises(StoreError):
        store.set("k", {"when": object()})


def test_ping_never_raises():
    client = MagicMock()
    client.ping.side_effect = RedisTimeoutError("timed out")

    assert KeyValueStore(client).ping() is False


def test_ping_ok(store):
    assert store.ping() is True


@pytest.mark.parametrize("test_id", ["connection", "ids"])
def test_connection_check_key_is_outside_test_keyspace(test_id):
    assert keys.CONNECTION_CHECK_KEY != keys.test_key(test_id)
    assert not keys.CONNECTION_CHECK_KEY.startswith("test:")
