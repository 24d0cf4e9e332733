"""
Core business logic module.

Contains the job stage state machine, the job store, the recipe analysis
engine, and the exception hierarchy.
"""

from backend.core.exceptions import (
    RecipeEmbedException,
    StoreError,
    ConnectivityError,
    JobNotFoundError,
    InvalidTransitionError,
    AnalysisError,
    PipelineFailure,
    DispatcherBusyError,
)
from backend.core.job_stages import JobStage, PIPELINE_ORDER

__all__ = [
    # Exceptions
    "RecipeEmbedException",
    "StoreError",
    "ConnectivityError",
    "JobNotFoundError",
    "InvalidTransitionError",
    "AnalysisError",
    "PipelineFailure",
    "DispatcherBusyError",
    # State machine
    "JobStage",
    "PIPELINE_ORDER",
]
