"""
Pantry Chef - Ingredient Matching.

Decides whether one pantry entry covers one recipe ingredient.

Two checks, in order:
1. Token overlap: share of recipe tokens present in the pantry tokens >= 0.5
   ("fresh basil leaves" recipe vs "basil leaves" pantry).
2. Substring containment of the canonical strings, either direction
   ("egg" inside "free range egg").

The check is asymmetric: the overlap ratio is measured against the recipe
side only, so matches(a, b) need not equal matches(b, a).
"""

from pantry_chef.tools.normalize import canonicalize

OVERLAP_THRESHOLD = 0.5


def ingredient_matches(pantry_raw: str, recipe_ingredient_raw: str) -> bool:
    """True when the pantry entry covers the recipe ingredient."""
    pantry_tokens = canonicalize(pantry_raw)
    recipe_tokens = canonicalize(recipe_ingredient_raw)

    if not pantry_tokens or not recipe_tokens:
        return False

    pantry_set = set(pantry_tokens)
    overlap = sum(1 for token in recipe_tokens if token in pantry_set)
    if overlap / len(recipe_tokens) >= OVERLAP_THRESHOLD:
        return True

    pantry_canonical = " ".join(pantry_tokens)
    recipe_canonical = " ".join(recipe_tokens)
    return recipe_canonical in pantry_canonical or pantry_canonical in recipe_canonical
