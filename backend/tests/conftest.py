"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time
os.environ["ENV"] = "test"
os.environ["ADMIN_PASSWORD"] = "test-admin-secret"
os.environ.pop("REDIS_URL", None)
os.environ.pop("KV_URL", None)

import pytest
from fastapi.testclient import TestClient

from quizapp.main import create_app
from quizapp.repositories.results import ResultRepository
from quizapp.repositories.tests import TestRepository
from quizapp.services.cascade import CascadeCoordinator
from quizapp.store.kv import KeyValueStore
from tests.helpers.fake_redis import FakeRedis

ADMIN_PASSWORD = "test-admin-secret"


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def store(fake_redis: FakeRedis) -> KeyValueStore:
    return KeyValueStore(fake_redis)


@pytest.fixture
def test_repo(store: KeyValueStore) -> TestRepository:
    return TestRepository(store)


@pytest.fixture
def result_repo(store: KeyValueStore) -> ResultRepository:
    return ResultRepository(store)


@pytest.fixture
def cascade(test_repo: TestRepository, result_repo: ResultRepository) -> CascadeCoordinator:
    return CascadeCoordinator(test_repo, result_repo)


@pytest.fixture
def client(store: KeyValueStore) -> TestClient:
    """API client over the in-memory store."""
    return TestClient(create_app(store=store))


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Password": ADMIN_PASSWORD}


@pytest.fixture
def math_quiz() -> dict:
    return {
        "title": "Math Quiz",
        "questions": [{"type": "numeric", "prompt": "2+2", "answer": 4}],
    }


@pytest.fixture
def mixed_quiz() -> dict:
    return {
        "title": "Mixed Review",
        "subject": "General",
        "grade": "3",
        "questions": [
            {
                "type": "multiple_choice",
                "prompt": "Which is a mammal?",
                "choices": ["Shark", "Whale", "Trout"],
                "answer": "Whale",
            },
            {"type": "short_answer", "prompt": "Capital of France?", "answer": "Paris"},
            {"type": "numeric", "prompt": "10 / 4", "answer": 2.5},
            {"type": "spelling", "prompt": "necessary", "answer": "necessary"},
        ],
    }
