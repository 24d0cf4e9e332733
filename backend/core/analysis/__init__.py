"""Recipe analysis: recipe selection and ingredient co-occurrence."""

from backend.core.analysis.cooccurrence import (
    CooccurrenceMatrix,
    Recipe,
    build_cooccurrence,
    normalize_ingredients,
)
from backend.core.analysis.engine import AnalysisEngine, RecipeAnalysisEngine

__all__ = [
    "AnalysisEngine",
    "CooccurrenceMatrix",
    "Recipe",
    "RecipeAnalysisEngine",
    "build_cooccurrence",
    "normalize_ingredients",
]
