"""API routers."""

from .embed import router as embed_router
from .health import router as health_router
from .jobs import router as jobs_router

__all__ = [
    "embed_router",
    "health_router",
    "jobs_router",
]
