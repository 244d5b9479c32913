"""Test definitions: ``test:<id>`` records indexed by the ``test:ids`` set."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from quizapp.core.app_exceptions import NotFoundError, StoreError, ValidationError, validation_details
from quizapp.core.logging import get_logger
from quizapp.repositories.ids import generate_id
from quizapp.schemas.quiz import TestDefinition, TestRecord
from quizapp.store import keys
from quizapp.store.kv import KeyValueStore

logger = get_logger(__name__)


def parse_definition(payload: TestDefinition | dict[str, Any]) -> TestDefinition:
    """Validate a write payload, raising ``ValidationError`` on any shape problem."""
    if isinstance(payload, TestDefinition):
        return payload
    try:
        return TestDefinition.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid test format: must have title and questions array",
            details=validation_details(exc),
        ) from exc


class TestRepository:
    """CRUD over test definitions.

    Writes spanning the record and the index are issued record first, index second,
    with no rollback: a crash in between leaves a record without an index entry.
    """

    __test__ = False

    def __init__(self, store: KeyValueStore, id_length: int = 10):
        self._store = store
        self._id_length = id_length

    def _decode(self, test_id: str, raw: Any) -> TestRecord:
        try:
            if not isinstance(raw, dict):
                raise TypeError(f"expected an object, got {type(raw).__name__}")
            return TestRecord.model_validate({**raw, "id": test_id})
        except (PydanticValidationError, TypeError) as exc:
            raise StoreError(
                f"Stored test {test_id} is malformed",
                details={"test_id": test_id, "error": str(exc)},
            ) from exc

    def create(self, payload: TestDefinition | dict[str, Any]) -> str:
        """Persist a new test and index it. Returns the generated id."""
        definition = parse_definition(payload)
        test_id = generate_id(self._id_length)

        self._store.set(keys.test_key(test_id), definition.model_dump(mode="json", exclude_none=True))
        self._store.set_add(keys.TEST_IDS_KEY, test_id)

        logger.info(
            "test_created",
            extra={"event": "test_created", "test_id": test_id, "questions": len(definition.questions)},
        )
        return test_id

    def get(self, test_id: str) -> TestRecord:
        raw = self._store.get(keys.test_key(test_id))
        if raw is None:
            raise NotFoundError("Test not found", details={"test_id": test_id})
        return self._decode(test_id, raw)

    def exists(self, test_id: str) -> bool:
        return self._store.get(keys.test_key(test_id)) is not None

    def update(self, test_id: str, payload: TestDefinition | dict[str, Any]) -> None:
        """Overwrite an existing test in place; id and index membership are unchanged."""
        definition = parse_definition(payload)
        if not self.exists(test_id):
            raise NotFoundError("Test not found", details={"test_id": test_id})

        self._store.set(keys.test_key(test_id), definition.model_dump(mode="json", exclude_none=True))
        logger.info("test_updated", extra={"event": "test_updated", "test_id": test_id})

    def delete(self, test_id: str) -> None:
        """Delete the record, then drop it from the index.

        Dependent results must already be gone (see ``CascadeCoordinator``).
        """
        if not self.exists(test_id):
            raise NotFoundError("Test not found", details={"test_id": test_id})

        self._store.delete(keys.test_key(test_id))
        self._store.set_remove(keys.TEST_IDS_KEY, test_id)
        logger.info("test_deleted", extra={"event": "test_deleted", "test_id": test_id})

    def list_all(self) -> list[TestRecord]:
        """Every readable indexed test, in index enumeration order.

        Never raises: an unreadable index gives an empty list and unreadable records
        are skipped.
        """
        try:
            test_ids = self._store.set_members(keys.TEST_IDS_KEY)
        except StoreError as exc:
            logger.warning(
                "test_index_read_failed",
                extra={"event": "test_index_read_failed", "error": exc.message},
            )
            return []

        tests: list[TestRecord] = []
        for test_id in test_ids:
            try:
                raw = self._store.get(keys.test_key(test_id))
                if raw is None:
                    # Index entry without a record
                    logger.warning(
                        "test_record_missing",
                        extra={"event": "test_record_missing", "test_id": test_id},
                    )
                    continue
                tests.append(self._decode(test_id, raw))
            except StoreError as exc:
                logger.warning(
                    "test_record_skipped",
                    extra={"event": "test_record_skipped", "test_id": test_id, "error": exc.message},
                )
        return tests
