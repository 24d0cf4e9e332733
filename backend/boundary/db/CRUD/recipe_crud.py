"""
Recipe CRUD operations.

Recipe lookups by tag and seeding helpers for the recipe corpus.

Dependencies: sqlalchemy, backend.boundary.db.models.recipe_model
System role: Recipe persistence operations for the analysis engine
"""

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.recipe_model import RecipeModel, RecipeTagModel


class RecipeCRUD(BaseCRUD[RecipeModel]):
    """CRUD operations for RecipeModel."""

    def __init__(self) -> None:
        """Initialize RecipeCRUD with RecipeModel."""
        super().__init__(RecipeModel)

    async def create_with_tags(
        self,
        session: AsyncSession,
        name: str,
        ingredients: Iterable[str],
        tags: Iterable[str] = (),
    ) -> RecipeModel:
        """
        Create a recipe together with its category tags.

        Args:
            session: Async database session
            name: Recipe title
            ingredients: Ingredient names
            tags: Category tags

        Returns:
            Created RecipeModel with tags loaded
        """
        recipe = RecipeModel(
            name=name,
            ingredients=list(ingredients),
            tags=[RecipeTagModel(tag=tag) for tag in dict.fromkeys(tags)],
        )
        session.add(recipe)
        await session.flush()
        await session.refresh(recipe, attribute_names=["tags"])
        return recipe

    async def get_by_tag(
        self,
        session: AsyncSession,
        tag: str | None,
    ) -> Sequence[RecipeModel]:
        """
        Retrieve recipes carrying a tag, or every recipe when tag is None.

        Args:
            session: Async database session
            tag: Category tag to filter by

        Returns:
            Sequence of RecipeModels ordered by id
        """
        stmt = select(RecipeModel).order_by(RecipeModel.id)
        if tag is not None:
            tagged = select(RecipeTagModel.recipe_id).where(RecipeTagModel.tag == tag)
            stmt = stmt.where(RecipeModel.id.in_(tagged))
        result = await session.execute(stmt)
        return result.scalars().all()


recipe_crud = RecipeCRUD()
