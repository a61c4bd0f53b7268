"""
Pantry Chef - Recipe Image Backfill.

Finds recipes without a usable picture and generates one for each through
the image fallback chain. Writing the updates back is left to the caller.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pantry_chef.core.entities import BackfillReport, DishImageResult
from pantry_chef.llm.images import DishImagePayload, is_renderable_image_url
from pantry_chef.llm.providers import generate_dish_image

logger = logging.getLogger(__name__)


@dataclass
class ImageBackfillRecipe:
    id: str
    name: str
    cuisine_type: str | None = None
    ingredients: list[str] = field(default_factory=list)
    image_url: str | None = None


@dataclass
class ImageUpdate:
    """New image fields for one recipe."""

    recipe_id: str
    image: DishImageResult
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipeId": self.recipe_id,
            "image": self.image.to_dict(),
            "generatedAt": self.generated_at.isoformat(),
        }


def needs_image(recipe: ImageBackfillRecipe) -> bool:
    """Missing, empty and non-image URLs need a new image. Renderable URLs are kept as-is."""
    return not is_renderable_image_url(recipe.image_url)


async def backfill_recipe_images(recipes: Sequence[ImageBackfillRecipe], limit: int = 100) -> BackfillReport[ImageUpdate]:
    """
    Generate images for up to `limit` recipes that need one.

    Recipes are processed one at a time. A recipe whose generation raises is
    counted as failed and the run continues.
    """
    candidates = [recipe for recipe in recipes if needs_image(recipe)][:limit]
    report: BackfillReport[ImageUpdate] = BackfillReport(scanned=len(candidates))

    for recipe in candidates:
        try:
            image = await generate_dish_image(
                DishImagePayload(
                    name=recipe.name,
                    cuisine_type=recipe.cuisine_type,
                    ingredients=list(recipe.ingredients),
                )
            )
        except Exception as e:
            logger.error(f"Image backfill failed for recipe {recipe.id}: {e}")
            report.failed += 1
            continue

        report.updates.append(
            ImageUpdate(recipe_id=recipe.id, image=image, generated_at=datetime.now(timezone.utc))
        )
        report.updated += 1

    logger.info(f"Image backfill: {report.to_dict()}")
    return report
