"""
Pantry Chef - Dish Image Sources.

The individual image providers used by the image fallback chain:

1. OpenAI image generation from a food-photography prompt
2. DeepSeek-derived web image search query
3. External image indexes (TheMealDB, then Wikipedia page thumbnails)

Each returns a URL (or data URI) or None; none of them raise for provider
failures.
"""

import logging
from dataclasses import dataclass, field

import httpx
from openai import AsyncOpenAI
from pydantic import BaseModel, ConfigDict

from pantry_chef.config import settings
from pantry_chef.llm.client import deepseek_json_request, message, provider_boundary

logger = logging.getLogger(__name__)

MEALDB_SEARCH_URL = "https://www.themealdb.com/api/json/v1/1/search.php"
WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"

IMAGE_QUERY_SYSTEM_PROMPT = (
    'Return strict JSON {"query":"..."}. Build an exact web image search query for the named cooked dish.'
)


@dataclass
class DishImagePayload:
    """What we know about a dish when looking for its picture."""

    name: str
    cuisine_type: str | None = None
    ingredients: list[str] = field(default_factory=list)
    style_prompt: str | None = None


class ImageQueryPayload(BaseModel):
    query: str | None = None


class _MealDbMeal(BaseModel):
    model_config = ConfigDict(extra="ignore")

    strMeal: str | None = None
    strMealThumb: str | None = None


class _MealDbSearch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    meals: list[_MealDbMeal] | None = None


class _WikiThumbnail(BaseModel):
    source: str | None = None


class _WikiPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    thumbnail: _WikiThumbnail | None = None


class _WikiQuery(BaseModel):
    pages: dict[str, _WikiPage] = {}


class _WikiSearch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    query: _WikiQuery | None = None


# =============================================================================
# Prompt / Query Building
# =============================================================================


def build_dish_image_prompt(payload: DishImagePayload) -> str:
    """Food-photography prompt for direct image generation."""
    ingredients = ", ".join(payload.ingredients[:10])
    cuisine = f"{payload.cuisine_type} cuisine" if payload.cuisine_type else "regional cuisine"

    parts = [
        f"Professional food photography of {payload.name}.",
        f"{cuisine}.",
        f"Primary ingredients: {ingredients}." if ingredients else "",
        f"Style: {payload.style_prompt}." if payload.style_prompt else "",
        "Close-up plated dish, natural light, realistic texture, high detail, no text, no logos, no watermark.",
    ]
    return " ".join(part for part in parts if part)


def build_image_search_topic(payload: DishImagePayload) -> str:
    """Name, cuisine and first five ingredients, used as the default search query."""
    parts = [payload.name, payload.cuisine_type or "", *payload.ingredients[:5]]
    return " ".join(part.strip() for part in parts if part and part.strip())


def is_renderable_image_url(value: str | None) -> bool:
    """True for image data URIs and absolute http(s) URLs."""
    if not value or not value.strip():
        return False
    if value.startswith("data:image/"):
        return True

    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError):
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def query_variants(query: str) -> list[str]:
    """Full query, then its first three words; unique and non-empty."""
    trimmed = query.strip()
    candidates = [trimmed, " ".join(trimmed.split()[:3])]
    return [variant for variant in dict.fromkeys(candidates) if variant]


# =============================================================================
# Providers
# =============================================================================


@provider_boundary("OpenAI image")
async def openai_image_request(prompt: str) -> str | None:
    """Generate a dish image. Returns a URL or a PNG data URI."""
    if not settings.has_openai_key:
        return None

    client = AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)
    response = await client.images.generate(
        model=settings.openai_image_model,
        prompt=prompt,
        size="1024x1024",
    )

    if not response.data:
        return None

    first = response.data[0]
    if first.url and is_renderable_image_url(first.url):
        return first.url
    if first.b64_json:
        return f"data:image/png;base64,{first.b64_json}"
    return None


async def deepseek_image_query(payload: DishImagePayload) -> str | None:
    """Ask DeepSeek for a precise image search query for the dish."""
    if not settings.has_deepseek_key:
        return None

    result = await deepseek_json_request(
        [
            message("system", IMAGE_QUERY_SYSTEM_PROMPT),
            message("user", build_image_search_topic(payload)),
        ],
        ImageQueryPayload,
    )

    query = (result.query or "").strip() if result else ""
    return query or None


@provider_boundary("TheMealDB")
async def fetch_mealdb_image(query: str, client: httpx.AsyncClient) -> str | None:
    """Thumbnail of the TheMealDB meal best matching the query."""
    response = await client.get(MEALDB_SEARCH_URL, params={"s": query})
    if not response.is_success:
        return None

    meals = _MealDbSearch.model_validate(response.json()).meals or []
    if not meals:
        return None

    normalized = query.lower()
    picked = next((meal for meal in meals if normalized in (meal.strMeal or "").lower()), meals[0])
    thumbnail = (picked.strMealThumb or "").strip()
    return thumbnail if is_renderable_image_url(thumbnail) else None


@provider_boundary("Wikipedia")
async def fetch_wikipedia_image(query: str, client: httpx.AsyncClient) -> str | None:
    """First renderable page thumbnail from a Wikipedia search for the dish."""
    response = await client.get(
        WIKIPEDIA_API_URL,
        params={
            "action": "query",
            "format": "json",
            "origin": "*",
            "generator": "search",
            "gsrsearch": f"{query} dish",
            "gsrlimit": "5",
            "prop": "pageimages",
            "piprop": "thumbnail",
            "pithumbsize": "1000",
        },
    )
    if not response.is_success:
        return None

    search = _WikiSearch.model_validate(response.json())
    pages = search.query.pages.values() if search.query else []
    for page in pages:
        source = page.thumbnail.source if page.thumbnail else None
        if is_renderable_image_url(source):
            return source
    return None


async def external_image_lookup(query: str, client: httpx.AsyncClient | None = None) -> str | None:
    """
    Look the dish up in external image indexes.

    For each query variant, TheMealDB is tried before Wikipedia; the first
    hit wins. Attempts are sequential.
    """
    if client is None:
        async with httpx.AsyncClient(
            timeout=settings.external_lookup_timeout_seconds,
            follow_redirects=True,
        ) as owned_client:
            return await external_image_lookup(query, owned_client)

    for term in query_variants(query):
        meal_db = await fetch_mealdb_image(term, client)
        if meal_db:
            logger.debug(f"TheMealDB image for '{term}'")
            return meal_db

        wiki = await fetch_wikipedia_image(term, client)
        if wiki:
            logger.debug(f"Wikipedia image for '{term}'")
            return wiki

    return None
