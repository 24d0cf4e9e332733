"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, builds the job store and
dispatcher in the lifespan, and configures uvicorn server.

Dependencies: fastapi, backend.api.routers, backend.boundary.db, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from backend.api import api_router
from backend.application.services.job_dispatcher import JobDispatcher
from backend.boundary.db.connection import get_async_engine, get_async_session_factory
from backend.boundary.db.create_tables import create_all_tables
from backend.configs import Settings, get_settings
from backend.core.analysis.engine import RecipeAnalysisEngine
from backend.core.job_store import JobStore
from backend.observability.logger import configure_logging
from backend.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: configure logging, open the pooled engine, ensure tables,
    build the job store and dispatcher, and start the workers.
    Shutdown: stop the workers and dispose of the engine.
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    engine = get_async_engine(settings.database)
    session_factory = get_async_session_factory(engine)
    if settings.database.create_tables:
        await create_all_tables(engine)

    store = JobStore(session_factory)
    dispatcher = JobDispatcher(
        store=store,
        engine=RecipeAnalysisEngine(session_factory),
        worker_count=settings.dispatcher.worker_count,
        queue_size=settings.dispatcher.queue_size,
        job_timeout_seconds=settings.dispatcher.job_timeout_seconds,
        record_failures=settings.dispatcher.record_failures,
    )
    app.state.session_factory = session_factory
    app.state.job_store = store
    app.state.dispatcher = dispatcher

    await dispatcher.start()
    logger.info("Recipe embedding service started")

    yield

    await dispatcher.stop()
    await engine.dispose()
    logger.info("Recipe embedding service stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings to run with (defaults to environment settings)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()
    app = FastAPI(
        title="Recipe Embedding API",
        description="Asynchronous recipe embedding jobs with stage polling",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "backend.api.main:app",
        host=settings.host,
        port=settings.port,
    )
