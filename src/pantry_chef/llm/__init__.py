"""
Pantry Chef - AI providers.

Provider calls and the fallback chains built on them.
"""

from pantry_chef.llm.client import is_ai_configured
from pantry_chef.llm.images import DishImagePayload, is_renderable_image_url
from pantry_chef.llm.providers import (
    generate_cook_narrative,
    generate_dish_image,
    generate_metadata_suggestion,
    resolve_image_provider,
    resolve_text_provider,
)

__all__ = [
    "DishImagePayload",
    "generate_cook_narrative",
    "generate_dish_image",
    "generate_metadata_suggestion",
    "is_ai_configured",
    "is_renderable_image_url",
    "resolve_image_provider",
    "resolve_text_provider",
]
