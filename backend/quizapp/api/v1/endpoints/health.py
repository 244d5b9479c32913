"""Health and readiness endpoints."""

from typing import Literal

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quizapp.common.request_id import get_request_id

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"


class ReadinessResponse(BaseModel):
    status: Literal["ok", "down"]
    store: Literal["ok", "down", "not_configured"]
    request_id: str


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check() -> HealthResponse:
    """Process is alive."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Pings the key-value store. Returns 503 when it does not answer.",
)
def readiness_check(request: Request) -> JSONResponse:
    store = getattr(request.app.state, "store", None)
    if store is None:
        store_status = "not_configured"
    else:
        store_status = "ok" if store.ping() else "down"

    body = ReadinessResponse(
        status="ok" if store_status == "ok" else "down",
        store=store_status,
        request_id=get_request_id(request),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if body.status == "ok" else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )
