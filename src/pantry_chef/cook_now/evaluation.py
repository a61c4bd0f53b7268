"""
Pantry Chef - Cook-Now Evaluation.

Runs the classifier against the filtered recipe set and, when that finds
nothing while filters were active, retries once against the unfiltered set.
Every outcome carries a reason and guidance string for the user.

Decision order:
1. Empty pantry -> nothing to match, no classification runs.
2. Strict pass has matches -> return it.
3. Filters active and a relaxed set supplied -> relaxed pass.
4. Otherwise -> no matches for the pantry.
"""

import logging
from collections.abc import Iterable, Sequence

from pantry_chef.cook_now.classifier import classify
from pantry_chef.core.entities import (
    AssistantFilters,
    CookNowEvaluation,
    CookNowResult,
    FilterableRecipe,
    PantryEntry,
    RecipeCandidate,
)

logger = logging.getLogger(__name__)

EMPTY_PANTRY_REASON = "Your pantry is empty."
EMPTY_PANTRY_GUIDANCE = "Add ingredients in My Pantry to get cooking recommendations."
RELAXED_REASON = "No strict filter matches were found."
RELAXED_GUIDANCE = "Showing relaxed matches based on your pantry ingredients."
FILTERED_OUT_REASON = "No recipes matched the selected filters."
FILTERED_OUT_GUIDANCE = "Try removing cuisine/prep/difficulty filters or add more pantry ingredients."
NO_MATCH_REASON = "No matching recipes found for pantry ingredients."
NO_MATCH_GUIDANCE = "Add pantry items or import recipes with overlapping ingredients."


def evaluate_cook_now(
    pantry: Sequence[PantryEntry],
    strict_recipes: Sequence[RecipeCandidate],
    relaxed_recipes: Sequence[RecipeCandidate] | None = None,
    filters: AssistantFilters | None = None,
) -> CookNowEvaluation:
    """
    Evaluate what the user can cook, relaxing filters when they block everything.

    `used_relaxed_filters` is True only when the strict pass found nothing,
    at least one filter was set, and a non-empty relaxed set produced matches.
    """
    filters = filters or AssistantFilters()

    if not pantry:
        return CookNowEvaluation.from_result(
            CookNowResult(),
            reason=EMPTY_PANTRY_REASON,
            guidance=EMPTY_PANTRY_GUIDANCE,
        )

    strict_result = classify(pantry, strict_recipes)
    if strict_result.has_matches:
        return CookNowEvaluation.from_result(strict_result)

    if filters.has_filters() and relaxed_recipes:
        logger.info(f"No strict matches across {len(strict_recipes)} recipes, retrying with {len(relaxed_recipes)} unfiltered")
        relaxed_result = classify(pantry, relaxed_recipes)
        if relaxed_result.has_matches:
            return CookNowEvaluation.from_result(
                relaxed_result,
                used_relaxed_filters=True,
                reason=RELAXED_REASON,
                guidance=RELAXED_GUIDANCE,
            )

        return CookNowEvaluation.from_result(
            strict_result,
            reason=FILTERED_OUT_REASON,
            guidance=FILTERED_OUT_GUIDANCE,
        )

    return CookNowEvaluation.from_result(
        strict_result,
        reason=NO_MATCH_REASON,
        guidance=NO_MATCH_GUIDANCE,
    )


def recipe_passes_filters(recipe: FilterableRecipe, filters: AssistantFilters) -> bool:
    """
    Whether a recipe satisfies the assistant filters.

    Cuisine is a case-insensitive substring match, prep time an upper bound,
    difficulty an exact match. Unset filters always pass; a set filter fails
    on a recipe that lacks the attribute.
    """
    if filters.cuisine_type:
        if not recipe.cuisine_type or filters.cuisine_type.lower() not in recipe.cuisine_type.lower():
            return False
    if filters.max_prep_time_minutes:
        if recipe.prep_time_minutes is None or recipe.prep_time_minutes > filters.max_prep_time_minutes:
            return False
    if filters.difficulty and recipe.difficulty != filters.difficulty:
        return False
    return True


def filter_recipes(recipes: Iterable[FilterableRecipe], filters: AssistantFilters) -> list[FilterableRecipe]:
    """Strict candidate set for a caller that only holds the full recipe list."""
    return [recipe for recipe in recipes if recipe_passes_filters(recipe, filters)]
