"""Delete or replace a test that may already have graded attempts.

Results are denormalized snapshots of a grading outcome and can stop matching the
test once its questions change. Deleting a test always purges its results first.
Updating purges only when the caller asks for it; otherwise old results are kept
as they are and the caller is told how many exist.

No step is atomic with the next. A failed purge does not block the test mutation,
so ``purged_count`` can under-report what existed.
"""

from __future__ import annotations

from typing import Any

from quizapp.core.app_exceptions import NotFoundError
from quizapp.core.logging import get_logger
from quizapp.repositories.results import ResultRepository
from quizapp.repositories.tests import TestRepository, parse_definition
from quizapp.schemas.quiz import TestDefinition, TestDeleted, TestUpdated

logger = get_logger(__name__)


class CascadeCoordinator:
    def __init__(self, tests: TestRepository, results: ResultRepository):
        self.tests = tests
        self.results = results

    def delete_test(self, test_id: str) -> TestDeleted:
        """Purge results, then delete the test record and its index entry.

        The purge runs even when the test record is already gone, so orphaned results
        are cleared before ``NotFoundError`` is raised.
        """
        purged = self.results.delete_all(test_id)
        self.tests.delete(test_id)

        logger.info(
            "test_deleted_with_results",
            extra={"event": "test_deleted_with_results", "test_id": test_id, "purged": purged},
        )
        return TestDeleted(purged_count=purged)

    def update_test(
        self,
        test_id: str,
        payload: TestDefinition | dict[str, Any],
        purge_results: bool = False,
    ) -> TestUpdated:
        """Optionally purge results, then overwrite the test definition."""
        definition = parse_definition(payload)
        if not self.tests.exists(test_id):
            raise NotFoundError("Test not found", details={"test_id": test_id})

        existing = self.results.count(test_id)
        purged_count = 0
        purged = False
        if purge_results and existing > 0:
            purged_count = self.results.delete_all(test_id)
            purged = True
        elif existing > 0:
            logger.info(
                "results_retained_on_update",
                extra={"event": "results_retained_on_update", "test_id": test_id, "count": existing},
            )

        self.tests.update(test_id, definition)
        return TestUpdated(
            id=test_id,
            had_results=existing > 0,
            results_count=existing,
            purged=purged,
            purged_count=purged_count,
        )
