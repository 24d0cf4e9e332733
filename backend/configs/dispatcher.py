"""
Job dispatcher configuration settings.

Sizing for the background worker pool and request limits for job submission.

Dependencies: pydantic, pydantic_settings
System role: Concurrency limits for embedding job execution
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatcherSettings(BaseSettings):
    """Worker pool and submission limits."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DISPATCHER_",
        case_sensitive=False,
        extra="ignore",
    )

    worker_count: int = Field(default=4, description="Concurrent pipeline workers")
    queue_size: int = Field(default=100, description="Maximum queued jobs before shedding load")
    job_timeout_seconds: float | None = Field(
        default=None,
        description="Per-job deadline checked between stages (None disables it)",
    )
    max_body_bytes: int = Field(
        default=1024 * 16,
        description="Maximum accepted size of an embed request body",
    )
    record_failures: bool = Field(
        default=False,
        description="Write the Failed stage with error detail when a pipeline fails; "
        "otherwise the job keeps its last committed stage",
    )

    @field_validator("worker_count", "queue_size", "max_body_bytes")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        """Reject zero or negative pool sizes and limits."""
        if v <= 0:
            raise ValueError("must be > 0")
        return v
