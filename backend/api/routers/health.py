"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: backend.core.job_store
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from backend.api.deps import get_job_store
from backend.core.exceptions import StoreError
from backend.core.job_store import JobStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(store: JobStore = Depends(get_job_store)) -> HealthResponse:
    """Database health check."""
    try:
        await store.ping()
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        )
    return HealthResponse(status="healthy", message="Database connection OK")
