"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from quizapp.api.v1.endpoints import health, results, tests

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(tests.router)
api_router.include_router(results.router)
