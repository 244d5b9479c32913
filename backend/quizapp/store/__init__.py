"""Key-value store adapter and keyspace helpers."""

from quizapp.store.kv import KeyValueStore

__all__ = ["KeyValueStore"]
