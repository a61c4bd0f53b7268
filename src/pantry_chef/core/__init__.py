"""Pantry Chef - Core value objects."""

from pantry_chef.core.entities import (
    IMAGE_PROVIDER_ORDER,
    TEXT_PROVIDER_ORDER,
    AssistantFilters,
    BackfillReport,
    CookMatch,
    CookNarrative,
    CookNowEvaluation,
    CookNowResult,
    Difficulty,
    DishImageResult,
    FilterableRecipe,
    MetadataSuggestion,
    PantryEntry,
    ProviderResult,
    RecipeCandidate,
    RecipeIngredient,
)

__all__ = [
    "IMAGE_PROVIDER_ORDER",
    "TEXT_PROVIDER_ORDER",
    "AssistantFilters",
    "BackfillReport",
    "CookMatch",
    "CookNarrative",
    "CookNowEvaluation",
    "CookNowResult",
    "Difficulty",
    "DishImageResult",
    "FilterableRecipe",
    "MetadataSuggestion",
    "PantryEntry",
    "ProviderResult",
    "RecipeCandidate",
    "RecipeIngredient",
]
