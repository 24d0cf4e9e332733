"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, IntegerIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - JobModel, RecipeModel, RecipeTagModel: Domain entities
  - job_crud, recipe_crud: CRUD operation singletons

Dependencies: sqlalchemy, backend.configs
System role: Database adapter providing persistent storage for embedding
jobs and the recipe corpus.
"""

from backend.boundary.db.base import Base, IntegerIDMixin, TimestampMixin
from backend.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
)
from backend.boundary.db.models.job_model import JobModel
from backend.boundary.db.models.recipe_model import RecipeModel, RecipeTagModel
from backend.boundary.db.CRUD import (
    BaseCRUD,
    JobCRUD,
    RecipeCRUD,
    job_crud,
    recipe_crud,
)

__all__ = [
    # Base classes
    "Base",
    "IntegerIDMixin",
    "TimestampMixin",
    # Connection
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "JobModel",
    "RecipeModel",
    "RecipeTagModel",
    # CRUD classes
    "BaseCRUD",
    "JobCRUD",
    "RecipeCRUD",
    # CRUD singletons
    "job_crud",
    "recipe_crud",
]
