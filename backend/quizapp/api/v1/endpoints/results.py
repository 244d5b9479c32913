"""Attempt submission (students) and result review (admin)."""

from fastapi import APIRouter, Depends, status

from quizapp.core.dependencies import ResultRepositoryDep, TestRepositoryDep, require_admin
from quizapp.schemas.result import (
    AttemptSubmission,
    ResultCount,
    ResultCreated,
    ResultData,
    ResultListing,
    ResultRecord,
)
from quizapp.services.attempts import submit_attempt

router = APIRouter(prefix="/tests/{test_id}", tags=["Results"])


@router.post("/attempts", response_model=ResultRecord, status_code=status.HTTP_201_CREATED)
def grade_attempt(
    test_id: str,
    submission: AttemptSubmission,
    tests: TestRepositoryDep,
    results: ResultRepositoryDep,
) -> ResultRecord:
    """Grade raw answers against the live test and archive the outcome."""
    return submit_attempt(tests, results, test_id, submission.answers)


@router.post("/results", response_model=ResultCreated, status_code=status.HTTP_201_CREATED)
def save_result(test_id: str, payload: ResultData, results: ResultRepositoryDep) -> ResultCreated:
    """Archive an outcome graded elsewhere. The test itself is not looked up."""
    record = results.save(test_id, payload)
    return ResultCreated(result_id=record.result_id)


@router.get(
    "/results",
    response_model=ResultListing,
    dependencies=[Depends(require_admin)],
)
def list_results(test_id: str, results: ResultRepositoryDep) -> ResultListing:
    """Results newest first with count/average/highest/lowest."""
    return results.list(test_id)


@router.get(
    "/results/count",
    response_model=ResultCount,
    dependencies=[Depends(require_admin)],
)
def count_results(test_id: str, results: ResultRepositoryDep) -> ResultCount:
    return ResultCount(count=results.count(test_id))


@router.get(
    "/results/{result_id}",
    response_model=ResultRecord,
    dependencies=[Depends(require_admin)],
)
def get_result(test_id: str, result_id: str, results: ResultRepositoryDep) -> ResultRecord:
    return results.get(test_id, result_id)
