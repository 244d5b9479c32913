"""Append-only attempt records under ``test:<testId>:result:<resultId>``.

Each test's results are enumerated through the ``test:<testId>:results`` set. The
owning test is not checked on write: a result can land against a stale test id.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from quizapp.core.app_exceptions import NotFoundError, StoreError, ValidationError, validation_details
from quizapp.core.logging import get_logger
from quizapp.repositories.ids import generate_id
from quizapp.schemas.result import ResultData, ResultListing, ResultRecord
from quizapp.services.statistics import aggregate
from quizapp.store import keys
from quizapp.store.kv import KeyValueStore

logger = get_logger(__name__)


def timestamp_sort_key(record: ResultRecord) -> float:
    """Epoch seconds of the record's timestamp; missing or malformed stamps sort as 0."""
    if not record.timestamp:
        return 0.0
    try:
        stamp = datetime.fromisoformat(record.timestamp)
    except ValueError:
        return 0.0
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=UTC)
    return stamp.timestamp()


class ResultRepository:
    def __init__(self, store: KeyValueStore, id_length: int = 10):
        self._store = store
        self._id_length = id_length

    def _decode(self, test_id: str, result_id: str, raw: Any) -> ResultRecord:
        try:
            if not isinstance(raw, dict):
                raise TypeError(f"expected an object, got {type(raw).__name__}")
            return ResultRecord.model_validate({**raw, "testId": test_id, "resultId": result_id})
        except (PydanticValidationError, TypeError) as exc:
            raise StoreError(
                f"Stored result {result_id} of test {test_id} is malformed",
                details={"test_id": test_id, "result_id": result_id, "error": str(exc)},
            ) from exc

    def save(self, test_id: str, result_data: ResultData | dict[str, Any]) -> ResultRecord:
        """Stamp and persist one attempt, then add it to the test's index."""
        if not test_id or not test_id.strip():
            raise ValidationError("Test ID is required")
        if not isinstance(result_data, ResultData):
            try:
                result_data = ResultData.model_validate(result_data)
            except PydanticValidationError as exc:
                raise ValidationError(
                    "Invalid result format",
                    details=validation_details(exc),
                ) from exc

        record = ResultRecord(
            **result_data.model_dump(),
            result_id=generate_id(self._id_length),
            test_id=test_id,
            timestamp=datetime.now(UTC).isoformat(timespec="milliseconds"),
        )
        self._store.set(
            keys.result_key(test_id, record.result_id),
            record.model_dump(mode="json", by_alias=True),
        )
        self._store.set_add(keys.results_index_key(test_id), record.result_id)

        logger.info(
            "result_saved",
            extra={
                "event": "result_saved",
                "test_id": test_id,
                "result_id": record.result_id,
                "percentage": record.percentage,
            },
        )
        return record

    def get(self, test_id: str, result_id: str) -> ResultRecord:
        raw = self._store.get(keys.result_key(test_id, result_id))
        if raw is None:
            raise NotFoundError(
                "Result not found", details={"test_id": test_id, "result_id": result_id}
            )
        return self._decode(test_id, result_id, raw)

    def count(self, test_id: str) -> int:
        """Size of the test's result index. Advisory: any failure reads as 0."""
        try:
            return self._store.set_size(keys.results_index_key(test_id))
        except StoreError as exc:
            logger.warning(
                "result_count_failed",
                extra={"event": "result_count_failed", "test_id": test_id, "error": exc.message},
            )
            return 0

    def list(self, test_id: str) -> ResultListing:
        """Readable results newest first, with statistics over the returned set.

        Never raises: an unreadable index gives an empty listing and unreadable records
        are skipped.
        """
        try:
            result_ids = self._store.set_members(keys.results_index_key(test_id))
        except StoreError as exc:
            logger.warning(
                "result_index_read_failed",
                extra={"event": "result_index_read_failed", "test_id": test_id, "error": exc.message},
            )
            result_ids = set()

        results: list[ResultRecord] = []
        for result_id in result_ids:
            try:
                results.append(self.get(test_id, result_id))
            except (NotFoundError, StoreError) as exc:
                logger.warning(
                    "result_record_skipped",
                    extra={
                        "event": "result_record_skipped",
                        "test_id": test_id,
                        "result_id": result_id,
                        "error": exc.message,
                    },
                )

        results.sort(key=timestamp_sort_key, reverse=True)
        return ResultListing(results=results, statistics=aggregate(results))

    def delete_all(self, test_id: str) -> int:
        """Delete every indexed result of a test, then the index itself.

        Best-effort: each record delete is attempted independently and failures are
        logged, not raised. Returns the number of records actually removed.
        """
        index_key = keys.results_index_key(test_id)
        try:
            result_ids = self._store.set_members(index_key)
        except StoreError as exc:
            logger.warning(
                "result_index_read_failed",
                extra={"event": "result_index_read_failed", "test_id": test_id, "error": exc.message},
            )
            return 0

        removed = 0
        for result_id in result_ids:
            try:
                removed += self._store.delete(keys.result_key(test_id, result_id))
            except StoreError as exc:
                logger.warning(
                    "result_delete_failed",
                    extra={
                        "event": "result_delete_failed",
                        "test_id": test_id,
                        "result_id": result_id,
                        "error": exc.message,
                    },
                )

        try:
            self._store.delete(index_key)
        except StoreError as exc:
            logger.warning(
                "result_index_delete_failed",
                extra={"event": "result_index_delete_failed", "test_id": test_id, "error": exc.message},
            )

        logger.info(
            "results_purged",
            extra={"event": "results_purged", "test_id": test_id, "removed": removed},
        )
        return removed
