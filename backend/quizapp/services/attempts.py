"""Serve tests to students and grade their submitted attempts."""

from collections.abc import Sequence

from quizapp.core.app_exceptions import ValidationError
from quizapp.core.logging import get_logger
from quizapp.repositories.results import ResultRepository
from quizapp.repositories.tests import TestRepository
from quizapp.schemas.quiz import TestRecord
from quizapp.schemas.result import ResultRecord
from quizapp.services.scoring import score

logger = get_logger(__name__)


def get_playable_test(tests: TestRepository, test_id: str) -> TestRecord:
    """Load a test for a student. A test without questions cannot be taken."""
    test = tests.get(test_id)
    if not test.questions:
        raise ValidationError("Test has no questions", details={"test_id": test_id})
    return test


def submit_attempt(
    tests: TestRepository,
    results: ResultRepository,
    test_id: str,
    submitted_answers: Sequence[object],
) -> ResultRecord:
    """Grade answers against the current test definition and archive the outcome."""
    test = get_playable_test(tests, test_id)
    outcome = score(test.questions, submitted_answers)
    record = results.save(test_id, outcome.to_result_data())

    logger.info(
        "attempt_graded",
        extra={
            "event": "attempt_graded",
            "test_id": test_id,
            "correct": outcome.correct,
            "total": outcome.total,
        },
    )
    return record
