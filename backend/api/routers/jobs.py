"""
Job status endpoint.

Routes: GET /status/{id}

Dependencies: backend.core.job_store, backend.models
System role: Job status HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend.api.deps import get_job_store
from backend.core.exceptions import JobNotFoundError, RecipeEmbedException
from backend.core.job_store import JobStore
from backend.models.job import JobStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/status", tags=["jobs"])


@router.get(
    "/{job_id}",
    response_model=JobStatusResponse,
    response_model_exclude_none=True,
)
async def get_job_status(
    job_id: int,
    store: JobStore = Depends(get_job_store),
) -> JobStatusResponse:
    """
    Get the current stage of a job for polling.

    Args:
        job_id: Job id returned by POST /embed
        store: Injected JobStore

    Returns:
        JobStatusResponse: {"status": "<stage>"}, plus "error" for failed jobs

    Raises:
        HTTPException(404): Job not found or lookup failed

    Example Response:
        {"status": "BuildingMatrix"}
    """
    logger.info(f"status request for id: {job_id}")
    try:
        snapshot = await store.get_status(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except RecipeEmbedException as e:
        logger.warning(f"Status lookup failed for id: {job_id}: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    return JobStatusResponse(status=snapshot.stage.value, error=snapshot.error)
