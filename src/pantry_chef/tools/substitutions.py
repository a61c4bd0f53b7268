"""
Pantry Chef - Ingredient Substitutions.

Static table of common swaps, used to annotate missing ingredients.
"""

from pantry_chef.tools.normalize import canonical_ingredient

# Declaration order matters: the first key found in the canonical name wins.
SUBSTITUTIONS: dict[str, tuple[str, ...]] = {
    "egg": ("flaxseed meal + water", "mashed banana"),
    "milk": ("oat milk", "almond milk"),
    "butter": ("olive oil", "coconut oil"),
    "sugar": ("honey", "maple syrup"),
    "flour": ("oat flour", "almond flour"),
    "tomato": ("canned tomato", "tomato puree"),
}


def substitution_key(missing_raw: str) -> str | None:
    """First table key contained in the canonical form of the ingredient."""
    canonical = canonical_ingredient(missing_raw)
    if not canonical:
        return None
    return next((key for key in SUBSTITUTIONS if key in canonical), None)


def substitutes_for(missing_raw: str) -> list[str]:
    """
    Human-readable substitution hints for a missing ingredient.

    The left side keeps the recipe's original wording.

    Examples:
        substitutes_for("Unsalted Butter")
            -> ["Unsalted Butter -> olive oil", "Unsalted Butter -> coconut oil"]
        substitutes_for("saffron") -> []
    """
    key = substitution_key(missing_raw)
    if key is None:
        return []
    return [f"{missing_raw} -> {alternative}" for alternative in SUBSTITUTIONS[key]]
