"""Pantry Chef - Recipe services built on the provider chains."""

from pantry_chef.core.entities import BackfillReport
from pantry_chef.services.image_backfill import ImageBackfillRecipe, ImageUpdate, backfill_recipe_images
from pantry_chef.services.metadata_completion import (
    CompletedMetadata,
    MetadataUpdate,
    RecipeDraft,
    backfill_recipe_metadata,
    complete_recipe_metadata,
    has_missing_recipe_metadata,
    parse_backfill_limit,
)

__all__ = [
    "BackfillReport",
    "CompletedMetadata",
    "ImageBackfillRecipe",
    "ImageUpdate",
    "MetadataUpdate",
    "RecipeDraft",
    "backfill_recipe_images",
    "backfill_recipe_metadata",
    "complete_recipe_metadata",
    "has_missing_recipe_metadata",
    "parse_backfill_limit",
]
