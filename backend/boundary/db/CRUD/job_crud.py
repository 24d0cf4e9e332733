"""
Job CRUD operations.

Provides Create, Read, Update operations for JobModel
with job-specific methods for stage tracking.

Dependencies: sqlalchemy, backend.boundary.db.models.job_model
System role: Job persistence operations for the job store
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.job_model import JobModel
from backend.core.job_stages import INITIAL_STAGE, JobStage


class JobCRUD(BaseCRUD[JobModel]):
    """
    CRUD operations for JobModel.

    Extends BaseCRUD with job-specific queries for stage tracking.
    """

    def __init__(self) -> None:
        """Initialize JobCRUD with JobModel."""
        super().__init__(JobModel)

    async def create_job(self, session: AsyncSession) -> JobModel:
        """
        Insert a new job in the initial stage.

        Args:
            session: Async database session

        Returns:
            JobModel with its assigned id
        """
        return await self.create(session, status=INITIAL_STAGE, error=None)

    async def get_for_update(
        self,
        session: AsyncSession,
        id: int,
    ) -> JobModel | None:
        """
        Retrieve a job and lock its row until the transaction ends.

        SQLite ignores FOR UPDATE; its writes are already serialized.

        Args:
            session: Async database session
            id: Job id

        Returns:
            JobModel if found, None otherwise
        """
        stmt = select(JobModel).where(JobModel.id == id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_status(
        self,
        session: AsyncSession,
        id: int,
        status: JobStage,
        error: str | None = None,
    ) -> JobModel | None:
        """
        Overwrite a job's stage and error detail.

        Args:
            session: Async database session
            id: Job id
            status: New stage
            error: Failure detail (cleared for non-failed stages)

        Returns:
            Updated JobModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            id,
            status=status,
            error=error,
        )


job_crud = JobCRUD()
