"""
Ingredient co-occurrence matrix construction.

Counts how often pairs of requested ingredients appear together in the
selected recipes.

Dependencies: None (pure domain layer)
System role: Matrix-construction step of the embedding pipeline
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Recipe:
    """Recipe as seen by the analysis engine."""

    id: int
    name: str
    ingredients: tuple[str, ...]
    tags: tuple[str, ...] = ()


@dataclass
class CooccurrenceMatrix:
    """
    Symmetric ingredient co-occurrence counts.

    Attributes:
        ingredients: Normalised ingredient labels, in request order
        counts: counts[i][j] is the number of recipes containing both
            ingredients[i] and ingredients[j]; the diagonal holds the number
            of recipes containing ingredients[i]
        recipe_count: Number of recipes the matrix was built from
    """

    ingredients: list[str]
    counts: list[list[int]] = field(default_factory=list)
    recipe_count: int = 0

    def count(self, first: str, second: str) -> int:
        """Return the co-occurrence count for two ingredient labels."""
        i = self.ingredients.index(normalize_ingredient(first))
        j = self.ingredients.index(normalize_ingredient(second))
        return self.counts[i][j]


def normalize_ingredient(name: str) -> str:
    """Collapse inner whitespace and lowercase an ingredient name."""
    return " ".join(name.split()).lower()


def normalize_ingredients(names: Iterable[str]) -> list[str]:
    """Normalise names, dropping blanks and duplicates while keeping order."""
    normalized = (normalize_ingredient(name) for name in names)
    return list(dict.fromkeys(name for name in normalized if name))


def build_cooccurrence(
    recipes: Sequence[Recipe],
    ingredients: Iterable[str],
) -> CooccurrenceMatrix:
    """
    Build the co-occurrence matrix for the requested ingredients.

    Args:
        recipes: Recipes selected for the job
        ingredients: Caller-supplied ingredient list

    Returns:
        CooccurrenceMatrix: Square matrix over the normalised ingredients
    """
    labels = normalize_ingredients(ingredients)
    size = len(labels)
    counts = [[0] * size for _ in range(size)]

    for recipe in recipes:
        present = {normalize_ingredient(name) for name in recipe.ingredients}
        hits = [i for i, label in enumerate(labels) if label in present]
        for i in hits:
            for j in hits:
                counts[i][j] += 1

    return CooccurrenceMatrix(ingredients=labels, counts=counts, recipe_count=len(recipes))
