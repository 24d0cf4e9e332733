"""Service orchestrators."""

from .job_dispatcher import JobDispatcher, WorkItem

__all__ = [
    "JobDispatcher",
    "WorkItem",
]
