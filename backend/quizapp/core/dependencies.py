"""FastAPI dependencies: store-backed repositories and the admin gate."""

import secrets
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from quizapp.core.app_exceptions import StoreError
from quizapp.core.config import settings
from quizapp.repositories.results import ResultRepository
from quizapp.repositories.tests import TestRepository
from quizapp.services.cascade import CascadeCoordinator
from quizapp.store.kv import KeyValueStore

ADMIN_HEADER = "X-Admin-Password"


def get_store(request: Request) -> KeyValueStore:
    """The process-wide store built at startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreError("Key-value store is not configured")
    return store


def get_test_repository(store: KeyValueStore = Depends(get_store)) -> TestRepository:
    return TestRepository(store, id_length=settings.TEST_ID_LENGTH)


def get_result_repository(store: KeyValueStore = Depends(get_store)) -> ResultRepository:
    return ResultRepository(store, id_length=settings.RESULT_ID_LENGTH)


def get_cascade(
    tests: TestRepository = Depends(get_test_repository),
    results: ResultRepository = Depends(get_result_repository),
) -> CascadeCoordinator:
    return CascadeCoordinator(tests, results)


def require_admin(
    x_admin_password: Annotated[str | None, Header(alias=ADMIN_HEADER)] = None,
) -> None:
    """Reject requests that do not carry the shared admin secret."""
    if not x_admin_password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{ADMIN_HEADER} header missing",
        )
    if not secrets.compare_digest(x_admin_password.encode(), settings.ADMIN_PASSWORD.encode()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid password",
        )


TestRepositoryDep = Annotated[TestRepository, Depends(get_test_repository)]
ResultRepositoryDep = Annotated[ResultRepository, Depends(get_result_repository)]
CascadeDep = Annotated[CascadeCoordinator, Depends(get_cascade)]
