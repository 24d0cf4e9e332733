"""
Recipe analysis engine.

The dispatcher depends on the AnalysisEngine protocol; RecipeAnalysisEngine
is the default implementation backed by the recipes table.

Dependencies: sqlalchemy, backend.boundary.db, backend.core.analysis.cooccurrence
System role: Recipe selection and co-occurrence construction for embedding jobs
"""

import asyncio
import logging
from typing import Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.boundary.db.CRUD.recipe_crud import recipe_crud
from backend.boundary.db.models.recipe_model import RecipeModel
from backend.core.analysis.cooccurrence import CooccurrenceMatrix, Recipe, build_cooccurrence
from backend.core.exceptions import AnalysisError

logger = logging.getLogger(__name__)


class AnalysisEngine(Protocol):
    """Recipe retrieval and matrix construction consumed by the dispatcher."""

    async def pull_recipes(self, tag: str | None) -> list[Recipe]:
        ...

    async def make_coolist(
        self,
        recipes: Sequence[Recipe],
        ingredients: Sequence[str],
    ) -> CooccurrenceMatrix:
        ...


def _to_recipe(model: RecipeModel) -> Recipe:
    return Recipe(
        id=model.id,
        name=model.name,
        ingredients=tuple(model.ingredients or ()),
        tags=tuple(sorted(tag.tag for tag in model.tags)),
    )


class RecipeAnalysisEngine:
    """Analysis engine reading recipes from the database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the engine.

        Args:
            session_factory: Factory bound to the pooled async engine
        """
        self._session_factory = session_factory

    async def pull_recipes(self, tag: str | None) -> list[Recipe]:
        """
        Select recipes for a category.

        Args:
            tag: Category tag; None selects every recipe

        Returns:
            list[Recipe]: Matching recipes ordered by id

        Raises:
            AnalysisError: Recipe query failed
        """
        try:
            async with self._session_factory() as session:
                models = await recipe_crud.get_by_tag(session, tag)
                recipes = [_to_recipe(model) for model in models]
        except (SQLAlchemyError, OSError) as e:
            raise AnalysisError(
                f"Recipe retrieval failed: {type(e).__name__}: {e}",
                {"tag": tag},
            ) from e

        logger.info(
            f"Pulled {len(recipes)} recipes",
            extra={"tag": tag, "recipe_count": len(recipes)},
        )
        return recipes

    async def make_coolist(
        self,
        recipes: Sequence[Recipe],
        ingredients: Sequence[str],
    ) -> CooccurrenceMatrix:
        """
        Build the ingredient co-occurrence matrix off the event loop.

        Args:
            recipes: Recipes returned by pull_recipes
            ingredients: Caller-supplied ingredient list

        Returns:
            CooccurrenceMatrix: Counts over the normalised ingredients
        """
        matrix = await asyncio.to_thread(build_cooccurrence, list(recipes), list(ingredients))
        logger.info(
            "Made coolist",
            extra={"ingredient_count": len(matrix.ingredients), "recipe_count": matrix.recipe_count},
        )
        return matrix
