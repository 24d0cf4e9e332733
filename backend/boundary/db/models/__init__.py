"""
Database models package.

Exports:
  - JobModel: Embedding job ORM model
  - RecipeModel, RecipeTagModel: Recipe corpus ORM models

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from backend.boundary.db.models.job_model import JobModel
from backend.boundary.db.models.recipe_model import RecipeModel, RecipeTagModel

__all__ = [
    "JobModel",
    "RecipeModel",
    "RecipeTagModel",
]
