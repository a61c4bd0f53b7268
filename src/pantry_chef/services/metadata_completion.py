"""
Pantry Chef - Recipe Metadata Completion.

Fills missing difficulty, timings and servings on a recipe draft from a
metadata suggestion, clamping everything to safe non-zero values. The
backfill runs the same completion over a batch of stored recipes.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from collections.abc import Sequence
from typing import Any

from pantry_chef.core.entities import BackfillReport, Difficulty
from pantry_chef.llm.providers import generate_metadata_suggestion

logger = logging.getLogger(__name__)

MIN_PREP_MINUTES = 5
MIN_COOK_MINUTES = 5
MIN_SERVINGS = 1
DEFAULT_SERVINGS = 2
MAX_BACKFILL_LIMIT = 3000


@dataclass
class RecipeDraft:
    """Recipe fields relevant to metadata completion."""

    name: str
    instructions: str
    ingredients: list[str] = field(default_factory=list)
    cuisine_type: str | None = None
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    servings: int | None = None
    difficulty: Difficulty | str | None = None
    tags: list[str] = field(default_factory=list)
    ai_suggested_metadata: dict[str, Any] | None = None
    id: str | None = None


@dataclass
class CompletedMetadata:
    cuisine_type: str | None
    prep_time_minutes: int | None
    cook_time_minutes: int | None
    servings: int | None
    difficulty: Difficulty | None
    tags: list[str]
    ai_suggested_metadata: dict[str, Any] | None
    is_ai_metadata_confirmed: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "cuisineType": self.cuisine_type,
            "prepTimeMinutes": self.prep_time_minutes,
            "cookTimeMinutes": self.cook_time_minutes,
            "servings": self.servings,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "tags": list(self.tags),
            "aiSuggestedMetadata": self.ai_suggested_metadata,
            "isAiMetadataConfirmed": self.is_ai_metadata_confirmed,
        }


def _is_finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def to_safe_minutes(value: float | None, minimum: int) -> int:
    if not _is_finite(value):
        return minimum
    return max(minimum, math.floor(value + 0.5))


def to_safe_servings(value: float | None) -> int:
    if not _is_finite(value):
        return DEFAULT_SERVINGS
    return max(MIN_SERVINGS, math.floor(value + 0.5))


def to_safe_difficulty(value: Difficulty | str | None) -> Difficulty:
    try:
        return Difficulty(value.upper() if isinstance(value, str) else value)
    except ValueError:
        return Difficulty.MEDIUM


def _prefer(current, suggested):
    return suggested if current is None else current


def has_missing_recipe_metadata(draft: RecipeDraft) -> bool:
    """True when difficulty, prep, cook time or servings is unset or non-positive."""
    return (
        not draft.difficulty
        or not draft.prep_time_minutes
        or draft.prep_time_minutes <= 0
        or not draft.cook_time_minutes
        or draft.cook_time_minutes <= 0
        or not draft.servings
        or draft.servings <= 0
    )


async def complete_recipe_metadata(draft: RecipeDraft, *, force: bool = False) -> CompletedMetadata:
    """
    Complete a draft's metadata.

    Values the draft already has win over the suggestion. With `force`,
    a suggestion is generated even when nothing is missing (used for
    imported recipes).
    """
    if not force and not has_missing_recipe_metadata(draft):
        return CompletedMetadata(
            cuisine_type=draft.cuisine_type,
            prep_time_minutes=draft.prep_time_minutes,
            cook_time_minutes=draft.cook_time_minutes,
            servings=draft.servings,
            difficulty=to_safe_difficulty(draft.difficulty),
            tags=list(draft.tags),
            ai_suggested_metadata=draft.ai_suggested_metadata,
            is_ai_metadata_confirmed=bool(draft.ai_suggested_metadata),
        )

    suggestion = await generate_metadata_suggestion(draft.name, draft.ingredients, draft.instructions)
    logger.info(f"Metadata for '{draft.name}' from {suggestion.provider}")

    return CompletedMetadata(
        cuisine_type=_prefer(draft.cuisine_type, suggestion.cuisine_type),
        prep_time_minutes=to_safe_minutes(_prefer(draft.prep_time_minutes, suggestion.prep_time_minutes), MIN_PREP_MINUTES),
        cook_time_minutes=to_safe_minutes(_prefer(draft.cook_time_minutes, suggestion.cook_time_minutes), MIN_COOK_MINUTES),
        servings=to_safe_servings(_prefer(draft.servings, suggestion.servings)),
        difficulty=to_safe_difficulty(_prefer(draft.difficulty, suggestion.difficulty)),
        tags=list(draft.tags) if draft.tags else list(suggestion.tags),
        ai_suggested_metadata={
            "source": suggestion.source,
            "provider": suggestion.provider,
            "generatedAt": datetime.now(timezone.utc).isoformat(),
            "suggested": {
                key: value
                for key, value in suggestion.to_dict().items()
                if key not in ("source", "provider")
            },
        },
        is_ai_metadata_confirmed=False,
    )


def parse_backfill_limit(value: Any = None, fallback: int = 100) -> int:
    """Backfill batch size from user input, clamped to 1..3000."""
    try:
        parsed = float(fallback if value is None else value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(parsed):
        return fallback
    return max(1, min(MAX_BACKFILL_LIMIT, math.floor(parsed)))


@dataclass
class MetadataUpdate:
    """Completed metadata for one recipe."""

    recipe_id: str | None
    metadata: CompletedMetadata

    def to_dict(self) -> dict[str, Any]:
        return {"recipeId": self.recipe_id, **self.metadata.to_dict()}


async def backfill_recipe_metadata(
    drafts: Sequence[RecipeDraft],
    limit: int = 100,
) -> BackfillReport[MetadataUpdate]:
    """
    Regenerate metadata for up to `limit` recipes with missing fields.

    Completion is forced so every candidate gets a fresh suggestion record.
    A recipe whose completion raises is counted as failed and the run
    continues.
    """
    candidates = [draft for draft in drafts if has_missing_recipe_metadata(draft)][:limit]
    report: BackfillReport[MetadataUpdate] = BackfillReport(scanned=len(candidates))

    for draft in candidates:
        try:
            metadata = await complete_recipe_metadata(draft, force=True)
        except Exception as e:
            logger.error(f"Metadata backfill failed for recipe {draft.id or draft.name}: {e}")
            report.failed += 1
            continue

        report.updates.append(MetadataUpdate(recipe_id=draft.id, metadata=metadata))
        report.updated += 1

    logger.info(f"Metadata backfill: {report.to_dict()}")
    return report
