"""
Pantry Chef - Heuristic Fallbacks.

What the app returns when no AI provider answers: keyword-based recipe
metadata and a synthesized SVG plate image. Both are pure and never fail.
"""

import base64
import math
from collections.abc import Sequence

from pantry_chef.core.entities import Difficulty, MetadataSuggestion
from pantry_chef.tools.normalize import canonical_word, normalize_name

# First cuisine with any keyword in the recipe text wins
CUISINE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Italian": ("basil", "oregano", "parmesan", "pasta", "tomato"),
    "Mexican": ("tortilla", "jalapeno", "cumin", "beans", "avocado"),
    "Indian": ("garam masala", "turmeric", "curry", "ginger", "cardamom"),
    "Japanese": ("soy sauce", "miso", "nori", "mirin", "dashi"),
    "American": ("cheddar", "bbq", "mustard", "ketchup", "beef"),
}
DEFAULT_CUISINE = "International"

ALLERGENS = frozenset({"milk", "cheese", "egg", "peanut", "almond", "wheat", "soy"})

DEFAULT_NUTRITION = {
    "calories": "Estimated by ingredient volume",
    "protein": "Moderate",
    "carbs": "Moderate",
    "fat": "Moderate",
}


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


def find_cuisine(text: str) -> str:
    normalized = normalize_name(text)
    for cuisine, keywords in CUISINE_KEYWORDS.items():
        if any(keyword in normalized for keyword in keywords):
            return cuisine
    return DEFAULT_CUISINE


def fallback_metadata_suggestion(
    name: str,
    ingredients: Sequence[str],
    instructions: str,
) -> MetadataSuggestion:
    """
    Estimate recipe metadata from ingredient count and instruction length.

    Prep time scales with ingredients (4 min each, 10-60), cook time with
    instruction words (half a minute each, 10-120). Difficulty steps up past
    8 ingredients or 140 words, and again past 14 or 260.
    """
    all_text = f"{name} {' '.join(ingredients)} {instructions}"
    ingredient_count = len(ingredients)
    word_count = len(instructions.split())

    difficulty = Difficulty.EASY
    if ingredient_count > 8 or word_count > 140:
        difficulty = Difficulty.MEDIUM
    if ingredient_count > 14 or word_count > 260:
        difficulty = Difficulty.HARD

    lowered = name.lower()
    tags = [
        "fresh" if "salad" in lowered else "home-cooked",
        "comfort" if "soup" in lowered else "weeknight",
    ]

    return MetadataSuggestion(
        cuisine_type=find_cuisine(all_text),
        prep_time_minutes=_clamp(ingredient_count * 4, 10, 60),
        cook_time_minutes=_clamp(math.floor(word_count / 2 + 0.5), 10, 120),
        servings=_clamp(math.ceil(ingredient_count / 2), 2, 8),
        difficulty=difficulty,
        tags=list(dict.fromkeys(tags)),
        nutrition=dict(DEFAULT_NUTRITION),
        allergens=[
            canonical
            for canonical in (canonical_word(ingredient) for ingredient in ingredients)
            if canonical in ALLERGENS
        ],
        source="fallback",
        provider="fallback",
    )


_PLATE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="1024" height="1024">'
    '<defs><linearGradient id="bg" x1="0" y1="0" x2="1" y2="1">'
    '<stop offset="0%" stop-color="#f59e0b"/><stop offset="100%" stop-color="#16a34a"/>'
    "</linearGradient></defs>"
    '<rect width="100%" height="100%" fill="url(#bg)"/>'
    '<ellipse cx="512" cy="520" rx="300" ry="90" fill="#0f172a" opacity="0.2"/>'
    '<circle cx="512" cy="460" r="250" fill="#f8fafc"/>'
    '<circle cx="512" cy="460" r="200" fill="#fff"/>'
    '<ellipse cx="512" cy="460" rx="170" ry="120" fill="{sauce}" opacity="0.9"/>'
    '<circle cx="445" cy="430" r="30" fill="{garnish}" opacity="0.9"/>'
    '<circle cx="565" cy="495" r="26" fill="{garnish}" opacity="0.8"/>'
    '<circle cx="520" cy="415" r="18" fill="#fde68a"/>'
    "</svg>"
)


def fallback_image_data_uri(recipe_name: str, style_prompt: str | None = None) -> str:
    """
    Deterministic placeholder plate as an SVG data URI.

    Sauce turns red for tomato/pizza dishes, garnish green for salads/herbs.
    No I/O.
    """
    tone = f"{recipe_name}{style_prompt or ''}".lower()
    sauce = "#ef4444" if "tomato" in tone or "pizza" in tone else "#f59e0b"
    garnish = "#22c55e" if "salad" in tone or "herb" in tone else "#84cc16"

    svg = _PLATE_SVG.format(sauce=sauce, garnish=garnish)
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"
