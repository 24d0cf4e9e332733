"""
Embedding submission endpoint.

Routes: POST /embed

Dependencies: backend.application.services.job_dispatcher, backend.models
System role: Job submission HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from backend.api.deps import get_dispatcher, get_settings_dependency
from backend.application.services.job_dispatcher import JobDispatcher
from backend.configs import Settings
from backend.core.exceptions import RecipeEmbedException
from backend.models.job import RecipeFilter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/embed", tags=["jobs"])


async def enforce_body_limit(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """Reject bodies larger than the configured limit with 413."""
    limit = settings.dispatcher.max_body_bytes
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Request body exceeds {limit} bytes",
        )
    if len(await request.body()) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Request body exceeds {limit} bytes",
        )


@router.post(
    "",
    response_class=PlainTextResponse,
    dependencies=[Depends(enforce_body_limit)],
)
async def submit_embedding(
    job_filter: RecipeFilter,
    dispatcher: JobDispatcher = Depends(get_dispatcher),
) -> PlainTextResponse:
    """
    Accept an embedding request and queue its pipeline.

    Returns immediately with the new job id as plain text; poll
    GET /status/{id} for progress.

    Args:
        job_filter: Tag, ingredients, and algorithm for the job
        dispatcher: Injected JobDispatcher

    Returns:
        PlainTextResponse: Job id, e.g. "1"

    Raises:
        HTTPException(404): Job could not be created or the queue is full
    """
    try:
        job_id = await dispatcher.submit(job_filter)
    except RecipeEmbedException as e:
        logger.info(f"Failed to process embedding request: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    return PlainTextResponse(str(job_id))
