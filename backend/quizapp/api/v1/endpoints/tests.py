"""Test authoring (admin) and test serving (students)."""

from fastapi import APIRouter, Depends, Query, status

from quizapp.core.dependencies import CascadeDep, TestRepositoryDep, require_admin
from quizapp.schemas.quiz import TestCreated, TestDefinition, TestDeleted, TestRecord, TestUpdated
from quizapp.services.attempts import get_playable_test

router = APIRouter(prefix="/tests", tags=["Tests"])


@router.get("", response_model=list[TestRecord])
def list_tests(tests: TestRepositoryDep) -> list[TestRecord]:
    """All readable tests. Unreadable entries are left out rather than failing the call."""
    return tests.list_all()


@router.post(
    "",
    response_model=TestCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_test(payload: TestDefinition, tests: TestRepositoryDep) -> TestCreated:
    return TestCreated(id=tests.create(payload))


@router.get("/{test_id}", response_model=TestRecord)
def get_test(test_id: str, tests: TestRepositoryDep) -> TestRecord:
    """Serve a test to a student. Tests without questions are rejected."""
    return get_playable_test(tests, test_id)


@router.put(
    "/{test_id}",
    response_model=TestUpdated,
    dependencies=[Depends(require_admin)],
)
def update_test(
    test_id: str,
    payload: TestDefinition,
    cascade: CascadeDep,
    purge_results: bool = Query(False, description="Delete existing results before updating"),
) -> TestUpdated:
    return cascade.update_test(test_id, payload, purge_results=purge_results)


@router.delete(
    "/{test_id}",
    response_model=TestDeleted,
    dependencies=[Depends(require_admin)],
)
def delete_test(test_id: str, cascade: CascadeDep) -> TestDeleted:
    """Delete a test together with all of its results."""
    return cascade.delete_test(test_id)
