"""
Pantry Chef - Cook-Now Classifier.

Partitions recipes into "can cook now" (nothing missing) and "can almost
cook" (small gap), and derives a shopping list from the almost-cook gaps.
Recipes too far from feasible are left out of both tiers.
"""

import logging
from collections.abc import Iterable, Sequence

from pantry_chef.core.entities import CookMatch, CookNowResult, PantryEntry, RecipeCandidate
from pantry_chef.tools.matching import ingredient_matches
from pantry_chef.tools.substitutions import substitutes_for

logger = logging.getLogger(__name__)

# A recipe is "almost" cookable when either bound holds
MAX_MISSING_FOR_ALMOST = 3
MIN_COMPLETION_FOR_ALMOST = 0.55


def missing_ingredients(pantry_names: Sequence[str], recipe: RecipeCandidate) -> list[str]:
    """Recipe ingredient names (original text) not covered by any pantry entry."""
    return [
        ingredient.name
        for ingredient in recipe.ingredients
        if not any(ingredient_matches(pantry_name, ingredient.name) for pantry_name in pantry_names)
    ]


def classify(pantry: Iterable[PantryEntry], recipes: Iterable[RecipeCandidate]) -> CookNowResult:
    """
    Classify recipes against the pantry.

    Pure and synchronous. Each recipe lands in at most one tier.
    """
    pantry_names = [entry.name for entry in pantry]
    result = CookNowResult()

    for recipe in recipes:
        missing = missing_ingredients(pantry_names, recipe)
        substitutions = [hint for name in missing for hint in substitutes_for(name)]

        if not missing:
            result.can_cook_now.append(
                CookMatch(recipe_id=recipe.id, recipe_name=recipe.name, substitutions=substitutions)
            )
            continue

        recipe_size = max(1, len(recipe.ingredients))
        completion_ratio = (recipe_size - len(missing)) / recipe_size
        if len(missing) <= MAX_MISSING_FOR_ALMOST or completion_ratio >= MIN_COMPLETION_FOR_ALMOST:
            result.can_almost_cook.append(
                CookMatch(
                    recipe_id=recipe.id,
                    recipe_name=recipe.name,
                    missing_ingredients=missing,
                    substitutions=substitutions,
                )
            )
        else:
            logger.debug(f"Skipping '{recipe.name}': {len(missing)} missing ({completion_ratio:.0%} covered)")

    result.shopping_list = sorted({name for match in result.can_almost_cook for name in match.missing_ingredients})
    return result
