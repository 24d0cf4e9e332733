"""
Job domain models and schemas.

Request/response schemas for embedding job submission and status polling.

Dependencies: pydantic
System role: Embedding job API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class RecipeFilter(BaseModel):
    """Embedding request body; immutable once submitted."""

    model_config = ConfigDict(frozen=True)

    tag: str | None = Field(default=None, description="Recipe category to select")
    ingredients: tuple[str, ...] = Field(
        description="Ingredients used to build the co-occurrence matrix",
    )
    algorithm: str = Field(description="Embedding strategy name")


class JobStatusResponse(BaseModel):
    """Response schema for GET /status/{id}."""

    status: str = Field(description="Current stage name")
    error: str | None = Field(default=None, description="Failure detail for failed jobs")
