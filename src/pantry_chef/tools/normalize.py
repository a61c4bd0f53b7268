"""
Pantry Chef - Ingredient Name Normalization.

Canonicalizes free-text ingredient names so pantry entries and recipe
ingredients compare despite casing, punctuation, plurals and synonyms.
"""

import re

# Keys are singularized forms: lookup happens after singularize().
# Values may be multi-word; they are split into separate tokens.
INGREDIENT_SYNONYMS: dict[str, str] = {
    "tomatoe": "tomato",
    "scallion": "green onion",
    "springonion": "green onion",
    "capsicum": "bell pepper",
    "chilly": "chili",
    "chily": "chili",
    "chilli": "chili",
    "coriander": "cilantro",
    "garbanzo": "chickpea",
    "potatoe": "potato",
    "clov": "clove",
}

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_name(name: str) -> str:
    """
    Normalize a name for consistent matching.

    Lowercases, strips, and collapses runs of whitespace.

    Examples:
        normalize_name("  Chicken Thighs  ") -> "chicken thighs"
        normalize_name("green   pepper") -> "green pepper"
    """
    return " ".join(name.lower().strip().split())


def singularize(word: str) -> str:
    """
    Heuristic singular form.

    Not linguistically complete: "glass" -> "glas", "leaves" -> "leav". Synonym
    keys are written against this output, so changing it changes matching.
    """
    if word.endswith("ies") and len(word) > 4:
        return f"{word[:-3]}y"
    if word.endswith("es") and len(word) > 4:
        return word[:-2]
    if word.endswith("s") and len(word) > 3:
        return word[:-1]
    return word


def canonical_word(word: str) -> str:
    """Strip stray characters, singularize, and resolve synonyms for one word."""
    collapsed = _NON_ALNUM.sub("", word.lower())
    singular = singularize(collapsed)
    return INGREDIENT_SYNONYMS.get(singular, singular)


def canonicalize(raw: str) -> list[str]:
    """
    Canonical token sequence for an ingredient phrase.

    Order is preserved and tokens are not deduplicated. Empty or
    punctuation-only input yields [].

    Examples:
        canonicalize("Tomatoes") -> ["tomato"]
        canonicalize("Scallions, chopped") -> ["green", "onion", "chopped"]
    """
    tokens: list[str] = []
    for word in _NON_ALNUM_RUN.split(normalize_name(raw)):
        if not word:
            continue
        canonical = canonical_word(word)
        tokens.extend(part for part in canonical.split(" ") if part)
    return tokens


def canonical_ingredient(raw: str) -> str:
    """Canonical tokens joined by single spaces."""
    return " ".join(canonicalize(raw))
