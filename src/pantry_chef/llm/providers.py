"""
Pantry Chef - Provider Fallback Chains.

Text (metadata suggestions, cook-now narratives):
    DeepSeek -> OpenAI -> heuristic (or None)

Images:
    OpenAI image -> DeepSeek search query -> external lookup -> SVG placeholder

Attempts are strictly sequential: a later provider is only called when every
earlier one came back empty. This keeps paid API usage to one provider per
request and makes the provider preference predictable.
"""

import json
import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from pantry_chef.core.entities import (
    CookMatch,
    CookNarrative,
    Difficulty,
    DishImageResult,
    MetadataSuggestion,
    ProviderResult,
)
from pantry_chef.llm.client import deepseek_json_request, message, openai_json_request
from pantry_chef.llm.fallback import fallback_image_data_uri, fallback_metadata_suggestion
from pantry_chef.llm.images import (
    DishImagePayload,
    build_dish_image_prompt,
    build_image_search_topic,
    deepseek_image_query,
    external_image_lookup,
    openai_image_request,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

METADATA_SYSTEM_PROMPT = (
    "Return strict JSON for recipe metadata fields: cuisineType, prepTimeMinutes, cookTimeMinutes, "
    "servings, difficulty(EASY|MEDIUM|HARD), tags, nutrition, allergens."
)
NARRATIVE_SYSTEM_PROMPT = (
    'Return strict JSON {"summary":string,"tips":string[]}. Keep advice practical and concise.'
)


class MetadataPayload(BaseModel):
    """Metadata fields as returned by a text provider. All optional."""

    cuisineType: str | None = None
    prepTimeMinutes: float | None = None
    cookTimeMinutes: float | None = None
    servings: float | None = None
    difficulty: str | None = None
    tags: list[str] | None = None
    nutrition: dict[str, Any] | None = None
    allergens: list[str] | None = None


class NarrativePayload(BaseModel):
    summary: str
    tips: list[str] = []


# =============================================================================
# Resolvers
# =============================================================================


async def resolve_text_provider(
    deepseek: Callable[[], Awaitable[T | None]],
    openai: Callable[[], Awaitable[T | None]],
) -> ProviderResult[T] | None:
    """
    First non-None value from DeepSeek, then OpenAI.

    OpenAI is never called when DeepSeek answers. Providers collapse their
    own failures to None, so this never raises for an unavailable provider.
    """
    deepseek_value = await deepseek()
    if deepseek_value is not None:
        return ProviderResult(provider="deepseek", value=deepseek_value)

    openai_value = await openai()
    if openai_value is not None:
        return ProviderResult(provider="openai", value=openai_value)

    logger.info("No text provider produced a result")
    return None


async def resolve_image_provider(
    *,
    openai_image: Callable[[], Awaitable[str | None]],
    deepseek_query: Callable[[], Awaitable[str | None]],
    external_lookup: Callable[[str], Awaitable[str | None]],
    fallback_image: Callable[[str], str],
    default_query: str,
    prompt: str,
) -> DishImageResult:
    """
    Walk the image chain until something produces a picture.

    The `source` tag separates a lookup driven by an AI-derived query
    ("deepseek_external") from one driven by the default query
    ("external_fallback"). The placeholder step cannot fail.
    """
    generated = await openai_image()
    if generated:
        return DishImageResult(url=generated, source="openai", prompt=prompt)

    ai_query = await deepseek_query()
    effective_query = ai_query or default_query

    external = await external_lookup(effective_query)
    if external:
        return DishImageResult(
            url=external,
            source="deepseek_external" if ai_query else "external_fallback",
            prompt=prompt,
            query=effective_query,
        )

    logger.info(f"No image source for '{effective_query}', using placeholder")
    return DishImageResult(
        url=fallback_image(effective_query),
        source="fallback_svg",
        prompt=prompt,
        query=effective_query,
    )


# =============================================================================
# Metadata
# =============================================================================


def _to_difficulty(value: str | None, fallback: Difficulty) -> Difficulty:
    try:
        return Difficulty((value or "").strip().upper())
    except ValueError:
        return fallback


def _to_minutes(value: float | None, fallback: int) -> int:
    if value is None or not math.isfinite(value):
        return fallback
    return math.floor(value + 0.5)


async def generate_metadata_suggestion(
    name: str,
    ingredients: Sequence[str],
    instructions: str,
) -> MetadataSuggestion:
    """
    Suggest recipe metadata, falling back to the heuristic estimate.

    Fields the provider leaves out are filled from the heuristic.
    """
    fallback = fallback_metadata_suggestion(name, ingredients, instructions)
    request_body = json.dumps(
        {"name": name, "ingredients": [{"name": item} for item in ingredients], "instructions": instructions}
    )
    messages = [message("system", METADATA_SYSTEM_PROMPT), message("user", request_body)]

    result = await resolve_text_provider(
        deepseek=lambda: deepseek_json_request(messages, MetadataPayload),
        openai=lambda: openai_json_request(messages, MetadataPayload),
    )
    if result is None:
        return fallback

    candidate = result.value
    return MetadataSuggestion(
        cuisine_type=candidate.cuisineType or fallback.cuisine_type,
        prep_time_minutes=_to_minutes(candidate.prepTimeMinutes, fallback.prep_time_minutes),
        cook_time_minutes=_to_minutes(candidate.cookTimeMinutes, fallback.cook_time_minutes),
        servings=_to_minutes(candidate.servings, fallback.servings),
        difficulty=_to_difficulty(candidate.difficulty, fallback.difficulty),
        tags=candidate.tags if candidate.tags is not None else fallback.tags,
        nutrition={k: str(v) for k, v in candidate.nutrition.items()} if candidate.nutrition else fallback.nutrition,
        allergens=candidate.allergens if candidate.allergens is not None else fallback.allergens,
        source="ai",
        provider=result.provider,
    )


# =============================================================================
# Cook-now narrative
# =============================================================================


async def generate_cook_narrative(
    pantry: Sequence[str],
    can_cook_now: Sequence[CookMatch],
    can_almost_cook: Sequence[CookMatch],
) -> CookNarrative | None:
    """Short summary and tips for a cook-now result, or None when no provider answers."""
    request_body = json.dumps(
        {
            "pantry": list(pantry),
            "canCookNow": [match.recipe_name for match in can_cook_now],
            "canAlmostCook": [
                {"name": match.recipe_name, "missing": match.missing_ingredients} for match in can_almost_cook
            ],
        }
    )
    messages = [message("system", NARRATIVE_SYSTEM_PROMPT), message("user", request_body)]

    result = await resolve_text_provider(
        deepseek=lambda: deepseek_json_request(messages, NarrativePayload),
        openai=lambda: openai_json_request(messages, NarrativePayload),
    )
    if result is None:
        return None

    return CookNarrative(summary=result.value.summary, tips=result.value.tips, provider=result.provider)


# =============================================================================
# Dish images
# =============================================================================


async def generate_dish_image(payload: DishImagePayload) -> DishImageResult:
    """Best available image for a dish. Always returns something renderable."""
    prompt = build_dish_image_prompt(payload)

    return await resolve_image_provider(
        openai_image=lambda: openai_image_request(prompt),
        deepseek_query=lambda: deepseek_image_query(payload),
        external_lookup=external_image_lookup,
        fallback_image=lambda query: fallback_image_data_uri(payload.name or query, payload.style_prompt),
        default_query=build_image_search_topic(payload) or payload.name,
        prompt=prompt,
    )
