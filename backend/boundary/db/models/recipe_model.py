"""
Recipe ORM models.

Recipes and their category tags, read by the recipe analysis engine
when selecting recipes for a job.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Recipe corpus storage
"""

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, IntegerIDMixin, TimestampMixin


class RecipeModel(Base, IntegerIDMixin, TimestampMixin):
    """
    Recipe ORM model.

    Attributes:
        id: Integer primary key
        name: Recipe title
        ingredients: JSON list of ingredient names
        tags: Category tags (one RecipeTagModel row per tag)
    """

    __tablename__ = "recipes"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    ingredients: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Ingredient names as listed in the recipe",
    )

    tags: Mapped[list["RecipeTagModel"]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class RecipeTagModel(Base, IntegerIDMixin):
    """Category tag attached to a recipe (e.g. "dessert")."""

    __tablename__ = "recipe_tags"

    recipe_id: Mapped[int] = mapped_column(
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    recipe: Mapped[RecipeModel] = relationship(back_populates="tags")
