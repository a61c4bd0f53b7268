"""API endpoints for cook-now recommendations and AI-assisted recipe metadata/images."""

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pantry_chef.cook_now import evaluate_cook_now, filter_recipes
from pantry_chef.core.entities import (
    AssistantFilters,
    Difficulty,
    FilterableRecipe,
    PantryEntry,
    RecipeIngredient,
)
from pantry_chef.llm import (
    DishImagePayload,
    generate_cook_narrative,
    generate_dish_image,
    generate_metadata_suggestion,
    is_ai_configured,
)
from pantry_chef.services.image_backfill import ImageBackfillRecipe
from pantry_chef.services.metadata_completion import RecipeDraft, complete_recipe_metadata

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


# =============================================================================
# Request Models
# =============================================================================


class CamelModel(BaseModel):
    """Accepts camelCase from the web client and snake_case from scripts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngredientInput(CamelModel):
    name: str = Field(min_length=1)


class PantryItemInput(CamelModel):
    name: str = Field(min_length=1)


class RecipeInput(CamelModel):
    id: str
    name: str
    ingredients: list[IngredientInput] = []
    cuisine_type: str | None = None
    prep_time_minutes: int | None = None
    difficulty: Difficulty | None = None

    def to_recipe(self) -> FilterableRecipe:
        return FilterableRecipe(
            id=self.id,
            name=self.name,
            ingredients=[RecipeIngredient(name=item.name) for item in self.ingredients],
            cuisine_type=self.cuisine_type,
            prep_time_minutes=self.prep_time_minutes,
            difficulty=self.difficulty,
        )


class CookFilters(CamelModel):
    cuisine_type: str | None = None
    max_prep_time_minutes: int | None = Field(default=None, gt=0)
    difficulty: Difficulty | None = None

    def to_filters(self) -> AssistantFilters:
        return AssistantFilters(
            cuisine_type=self.cuisine_type,
            max_prep_time_minutes=self.max_prep_time_minutes,
            difficulty=self.difficulty,
        )


class CookNowRequest(CamelModel):
    """Pantry and the full recipe list; filters narrow the strict pass."""

    pantry: list[PantryItemInput] = []
    recipes: list[RecipeInput] = []
    filters: CookFilters = CookFilters()


class MetadataDraftRequest(CamelModel):
    name: str = Field(min_length=2)
    ingredients: list[IngredientInput] = Field(min_length=1)
    instructions: str = Field(min_length=10)


class CompleteMetadataRequest(CamelModel):
    name: str = Field(min_length=2)
    instructions: str
    ingredients: list[IngredientInput] = []
    cuisine_type: str | None = None
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    servings: int | None = None
    difficulty: Difficulty | None = None
    tags: list[str] = []
    force: bool = False


class BackfillRecipeInput(CamelModel):
    """A stored recipe as exported for the metadata and image backfills."""

    id: str
    name: str
    instructions: str = ""
    ingredients: list[IngredientInput] = []
    cuisine_type: str | None = None
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    servings: int | None = None
    difficulty: Difficulty | None = None
    tags: list[str] = []
    image_url: str | None = None

    def to_draft(self) -> RecipeDraft:
        return RecipeDraft(
            id=self.id,
            name=self.name,
            instructions=self.instructions,
            ingredients=[item.name for item in self.ingredients],
            cuisine_type=self.cuisine_type,
            prep_time_minutes=self.prep_time_minutes,
            cook_time_minutes=self.cook_time_minutes,
            servings=self.servings,
            difficulty=self.difficulty,
            tags=self.tags,
        )

    def to_image_recipe(self) -> ImageBackfillRecipe:
        return ImageBackfillRecipe(
            id=self.id,
            name=self.name,
            cuisine_type=self.cuisine_type,
            ingredients=[item.name for item in self.ingredients],
            image_url=self.image_url,
        )


class ImageGenerationRequest(CamelModel):
    name: str = Field(min_length=1)
    cuisine_type: str | None = None
    ingredients: list[IngredientInput] = []
    style_prompt: str | None = Field(default=None, max_length=200)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/cook-now")
async def cook_now(req: CookNowRequest) -> dict[str, Any]:
    """
    What can be cooked from the pantry.

    The strict pass uses recipes matching the filters; the unfiltered list is
    the relaxed set. When a text provider answers, a narrative is attached and
    `source` becomes "ai".
    """
    pantry = [PantryEntry(name=item.name) for item in req.pantry]
    all_recipes = [recipe.to_recipe() for recipe in req.recipes]
    filters = req.filters.to_filters()

    evaluation = evaluate_cook_now(
        pantry=pantry,
        strict_recipes=[recipe.to_candidate() for recipe in filter_recipes(all_recipes, filters)],
        relaxed_recipes=[recipe.to_candidate() for recipe in all_recipes],
        filters=filters,
    )

    narrative = None
    if pantry:
        narrative = await generate_cook_narrative(
            pantry=[entry.name for entry in pantry],
            can_cook_now=evaluation.can_cook_now,
            can_almost_cook=evaluation.can_almost_cook,
        )

    body = evaluation.to_dict()
    body["source"] = "ai" if narrative else evaluation.source
    body["aiNarrative"] = narrative.to_dict() if narrative else None
    return body


@router.post("/metadata")
async def metadata(req: MetadataDraftRequest) -> dict[str, Any]:
    """Suggest cuisine, timings, servings, difficulty, tags and allergens for a draft."""
    suggestion = await generate_metadata_suggestion(
        name=req.name,
        ingredients=[item.name for item in req.ingredients],
        instructions=req.instructions,
    )
    return suggestion.to_dict()


@router.post("/complete-metadata")
async def complete_metadata(req: CompleteMetadataRequest) -> dict[str, Any]:
    """Fill the gaps in a recipe's metadata with safe values."""
    completed = await complete_recipe_metadata(
        RecipeDraft(
            name=req.name,
            instructions=req.instructions,
            ingredients=[item.name for item in req.ingredients],
            cuisine_type=req.cuisine_type,
            prep_time_minutes=req.prep_time_minutes,
            cook_time_minutes=req.cook_time_minutes,
            servings=req.servings,
            difficulty=req.difficulty,
            tags=req.tags,
        ),
        force=req.force,
    )
    return completed.to_dict()


@router.post("/generate-image")
async def generate_image(req: ImageGenerationRequest) -> dict[str, Any]:
    """Best available dish image; degrades to a placeholder, never errors."""
    image = await generate_dish_image(
        DishImagePayload(
            name=req.name,
            cuisine_type=req.cuisine_type,
            ingredients=[item.name for item in req.ingredients],
            style_prompt=req.style_prompt,
        )
    )
    logger.info(f"Image for '{req.name}' from {image.source}")
    return {"image": image.to_dict(), "source": image.source, "aiConfigured": is_ai_configured()}
