"""
Dependency injection container.

Factory functions for FastAPI dependencies. The job store and dispatcher
are built once in the application lifespan and kept on app.state.

Dependencies: fastapi, backend.configs, backend.application, backend.core
System role: DI container for service injection
"""

from fastapi import Request

from backend.application.services.job_dispatcher import JobDispatcher
from backend.configs import Settings, get_settings
from backend.core.job_store import JobStore


def get_settings_dependency(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def get_job_store(request: Request) -> JobStore:
    """
    Get the application's job store.

    Args:
        request: Incoming request (provides app.state)

    Returns:
        JobStore: Store created at startup
    """
    return request.app.state.job_store


def get_dispatcher(request: Request) -> JobDispatcher:
    """
    Get the application's job dispatcher.

    Args:
        request: Incoming request (provides app.state)

    Returns:
        JobDispatcher: Dispatcher started at startup
    """
    return request.app.state.dispatcher
