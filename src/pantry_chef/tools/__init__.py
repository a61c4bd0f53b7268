"""
Pantry Chef - Ingredient tools.

Normalization, matching and substitution lookup. All pure functions over
read-only tables.
"""

from pantry_chef.tools.matching import ingredient_matches
from pantry_chef.tools.normalize import canonical_ingredient, canonical_word, canonicalize, normalize_name
from pantry_chef.tools.substitutions import SUBSTITUTIONS, substitutes_for

__all__ = [
    "SUBSTITUTIONS",
    "canonical_ingredient",
    "canonical_word",
    "canonicalize",
    "ingredient_matches",
    "normalize_name",
    "substitutes_for",
]
