"""
Exception hierarchy for the recipe embedding service.

Provides layered exception structure for job store, dispatcher, and
analysis failures. All exceptions include context for observability.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RecipeEmbedException(Exception):
    """Base exception for all recipe embedding service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class StoreError(RecipeEmbedException):
    """Raised when a job store operation fails at the persistence layer."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Store operation that failed (create_job, set_status, get_status)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class ConnectivityError(StoreError):
    """Raised when the database cannot be reached."""

    pass


class JobNotFoundError(RecipeEmbedException):
    """Raised when a job id does not exist."""

    def __init__(self, job_id: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize job not found error.

        Args:
            job_id: ID of the missing job
            details: Additional context
        """
        self.job_id = job_id
        details = details or {}
        details["job_id"] = job_id
        super().__init__(f"Job not found: {job_id}", details)


class InvalidTransitionError(RecipeEmbedException):
    """Raised when a status write would skip, revert, or leave a terminal stage."""

    def __init__(self, job_id: int, current: str, target: str) -> None:
        self.job_id = job_id
        self.current = current
        self.target = target
        super().__init__(
            f"Illegal stage transition {current} -> {target}",
            {"job_id": job_id},
        )


class AnalysisError(RecipeEmbedException):
    """Raised when recipe retrieval or co-occurrence construction fails."""

    pass


class PipelineFailure(RecipeEmbedException):
    """Raised when a job's background pipeline cannot finish."""

    def __init__(
        self,
        message: str,
        job_id: int,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize pipeline failure.

        Args:
            message: Error message
            job_id: Job whose pipeline failed
            stage: Last committed stage when the failure occurred
            details: Additional context
        """
        self.job_id = job_id
        self.stage = stage
        details = details or {}
        details["job_id"] = job_id
        if stage:
            details["stage"] = stage
        super().__init__(message, details)


class DispatcherBusyError(RecipeEmbedException):
    """Raised when the dispatch queue is full; no job is created."""

    pass
