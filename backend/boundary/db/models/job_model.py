"""
Job ORM model.

Persists embedding jobs and the stage each one has reached.
Rows are written once on submission and then only have their stage
(and, on failure, error detail) overwritten by the dispatcher.

Dependencies: sqlalchemy, backend.boundary.db.base, backend.core.job_stages
System role: Job status persistence for background embedding pipelines
"""

from sqlalchemy import Enum, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, IntegerIDMixin, TimestampMixin
from backend.core.job_stages import INITIAL_STAGE, JobStage


class JobModel(Base, IntegerIDMixin, TimestampMixin):
    """
    Job ORM model backing the job store.

    Attributes:
        id: Integer primary key assigned on insert
        status: Stage name stored as text (Selecting, BuildingMatrix, ...)
        error: Failure detail; NULL unless status is Failed
        created_at: Submission timestamp (UTC)
        updated_at: Last status write timestamp (UTC)

    Workflow:
        1. POST /embed inserts a row with status=Selecting
        2. Dispatcher worker overwrites status after each pipeline stage
        3. Clients poll GET /status/{id} to read the last committed stage
    """

    __tablename__ = "jobs"

    status: Mapped[JobStage] = mapped_column(
        Enum(
            JobStage,
            native_enum=False,
            length=32,
            values_callable=lambda stages: [stage.value for stage in stages],
        ),
        nullable=False,
        default=INITIAL_STAGE,
    )

    error: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        doc="Failure detail for jobs in the Failed stage",
    )
