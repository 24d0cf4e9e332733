"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_dispatcher,
    get_job_store,
    get_settings_dependency,
)

__all__ = [
    "get_dispatcher",
    "get_job_store",
    "get_settings_dependency",
]
