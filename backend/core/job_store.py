"""
Job store.

Creates embedding jobs and reads/writes their stage. Every operation runs
in its own short transaction on a pooled session, so each status write is
committed and visible to pollers as soon as the call returns.

Dependencies: sqlalchemy, backend.boundary.db, backend.core.job_stages
System role: Single source of truth for job progress
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.boundary.db.CRUD.job_crud import job_crud
from backend.core.exceptions import (
    ConnectivityError,
    InvalidTransitionError,
    JobNotFoundError,
    RecipeEmbedException,
    StoreError,
)
from backend.core.job_stages import JobStage

logger = logging.getLogger(__name__)

MAX_ERROR_LENGTH = 2000


@dataclass(frozen=True)
class JobStatusSnapshot:
    """Last committed stage of a job, with error detail for failed jobs."""

    stage: JobStage
    error: str | None = None


class JobStore:
    """Persisted job records accessed through scoped, per-operation sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Factory bound to the pooled async engine
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """
        Open a session with a transaction that commits on success.

        Translates driver and pool failures into StoreError subclasses;
        domain errors raised inside the block pass through unchanged.
        """
        try:
            async with self._session_factory.begin() as session:
                yield session
        except RecipeEmbedException:
            raise
        except (OperationalError, InterfaceError, PoolTimeoutError, OSError) as e:
            logger.error(f"{__name__}:{operation} - database unreachable: {e}")
            raise ConnectivityError("Database unreachable", operation=operation) from e
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise StoreError(f"{type(e).__name__}: {e}", operation=operation) from e

    async def create_job(self) -> int:
        """
        Insert a new job in the Selecting stage.

        Returns:
            int: Assigned job id

        Raises:
            ConnectivityError: Database unreachable
            StoreError: Insert failed
        """
        async with self._transaction("create_job") as session:
            job = await job_crud.create_job(session)
            job_id = job.id

        logger.info("Job created", extra={"job_id": job_id, "stage": JobStage.SELECTING.value})
        return job_id

    async def set_status(
        self,
        job_id: int,
        status: JobStage,
        error: str | None = None,
    ) -> None:
        """
        Overwrite a job's stage.

        The row is locked while the transition is checked, so concurrent
        writers cannot skip or revert a stage.

        Args:
            job_id: Job id
            status: Stage to record
            error: Failure detail, kept only when status is Failed

        Raises:
            JobNotFoundError: No job with this id
            InvalidTransitionError: Write would skip, revert, or leave a terminal stage
            ConnectivityError: Database unreachable
            StoreError: Update failed
        """
        if status is JobStage.FAILED and error:
            error = error[:MAX_ERROR_LENGTH]
        else:
            error = None

        async with self._transaction("set_status") as session:
            job = await job_crud.get_for_update(session, job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            if not job.status.can_transition_to(status):
                raise InvalidTransitionError(job_id, job.status.value, status.value)
            await job_crud.update_status(session, job_id, status, error)

        logger.info(
            f"Job {job_id} -> {status.value}",
            extra={"job_id": job_id, "stage": status.value},
        )

    async def get_status(self, job_id: int) -> JobStatusSnapshot:
        """
        Read the last committed stage of a job.

        Args:
            job_id: Job id

        Returns:
            JobStatusSnapshot: Stage and error detail

        Raises:
            JobNotFoundError: No job with this id
            ConnectivityError: Database unreachable
            StoreError: Query failed
        """
        async with self._transaction("get_status") as session:
            job = await job_crud.get_by_id(session, job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            return JobStatusSnapshot(stage=job.status, error=job.error)

    async def ping(self) -> None:
        """
        Run a trivial query to confirm the database is reachable.

        Raises:
            ConnectivityError: Database unreachable
            StoreError: Query failed
        """
        async with self._transaction("ping") as session:
            await session.execute(text("SELECT 1"))
