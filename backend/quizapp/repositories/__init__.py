"""Repositories over the key-value store."""

from quizapp.repositories.results import ResultRepository
from quizapp.repositories.tests import TestRepository

__all__ = ["ResultRepository", "TestRepository"]
