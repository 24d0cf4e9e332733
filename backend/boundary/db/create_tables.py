"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, backend.configs
System role: Database schema initialization

Usage:
    python -m backend.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from backend.boundary.db.base import Base
from backend.boundary.db.connection import get_async_engine
from backend.configs import get_settings

# Import all models to register them with Base.metadata
from backend.boundary.db.models.job_model import JobModel  # noqa: F401
from backend.boundary.db.models.recipe_model import RecipeModel, RecipeTagModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: issues CREATE TABLE only for missing tables, so safe
    to run on every startup. Existing tables remain unchanged.

    Args:
        engine: Async engine to create tables on

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


async def _main() -> None:
    engine = get_async_engine(get_settings().database)
    try:
        await create_all_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())
