"""
Pantry Chef - Value objects.

Everything here is constructed per request from caller-supplied data and
discarded once the response is built. `to_dict()` produces the camelCase
shape the web client expects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")

TextProvider = Literal["deepseek", "openai"]
ImageSource = Literal["openai", "deepseek_external", "external_fallback", "fallback_svg"]

# Provider preference order, used for health output and logging
TEXT_PROVIDER_ORDER: tuple[str, ...] = ("deepseek", "openai")
IMAGE_PROVIDER_ORDER: tuple[str, ...] = ("openai", "deepseek_external", "external_fallback", "fallback_svg")


class Difficulty(str, Enum):
    """Recipe difficulty."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class PantryEntry:
    """One ingredient the user has on hand (free text)."""

    name: str


@dataclass(frozen=True)
class RecipeIngredient:
    """Free-text ingredient required by a recipe."""

    name: str


@dataclass
class RecipeCandidate:
    """A recipe eligible for cook-now evaluation. Identity is `id`."""

    id: str
    name: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)


@dataclass
class FilterableRecipe(RecipeCandidate):
    """Recipe with the attributes assistant filters can narrow on."""

    cuisine_type: str | None = None
    prep_time_minutes: int | None = None
    difficulty: Difficulty | None = None

    def to_candidate(self) -> RecipeCandidate:
        return RecipeCandidate(id=self.id, name=self.name, ingredients=list(self.ingredients))


@dataclass(frozen=True)
class AssistantFilters:
    """Optional constraints applied to the recipe set before evaluation."""

    cuisine_type: str | None = None
    max_prep_time_minutes: int | None = None
    difficulty: Difficulty | None = None

    def has_filters(self) -> bool:
        return bool(self.cuisine_type or self.max_prep_time_minutes or self.difficulty)


# =============================================================================
# Results
# =============================================================================


@dataclass
class CookMatch:
    """A recipe placed in a cook-now tier."""

    recipe_id: str
    recipe_name: str
    missing_ingredients: list[str] = field(default_factory=list)
    substitutions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipeId": self.recipe_id,
            "recipeName": self.recipe_name,
            "missingIngredients": list(self.missing_ingredients),
            "substitutions": list(self.substitutions),
        }


@dataclass
class CookNowResult:
    """Output of a single classification pass."""

    can_cook_now: list[CookMatch] = field(default_factory=list)
    can_almost_cook: list[CookMatch] = field(default_factory=list)
    shopping_list: list[str] = field(default_factory=list)
    source: Literal["fallback", "ai"] = "fallback"

    @property
    def has_matches(self) -> bool:
        return bool(self.can_cook_now or self.can_almost_cook)

    def to_dict(self) -> dict[str, Any]:
        return {
            "canCookNow": [match.to_dict() for match in self.can_cook_now],
            "canAlmostCook": [match.to_dict() for match in self.can_almost_cook],
            "shoppingList": list(self.shopping_list),
            "source": self.source,
        }


@dataclass
class CookNowEvaluation(CookNowResult):
    """Classification result plus the relaxation decision and user guidance."""

    used_relaxed_filters: bool = False
    reason: str = ""
    guidance: str = ""

    @classmethod
    def from_result(
        cls,
        result: CookNowResult,
        *,
        used_relaxed_filters: bool = False,
        reason: str = "",
        guidance: str = "",
    ) -> "CookNowEvaluation":
        return cls(
            can_cook_now=result.can_cook_now,
            can_almost_cook=result.can_almost_cook,
            shopping_list=result.shopping_list,
            source=result.source,
            used_relaxed_filters=used_relaxed_filters,
            reason=reason,
            guidance=guidance,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "usedRelaxedFilters": self.used_relaxed_filters,
                "reason": self.reason,
                "guidance": self.guidance,
            }
        )
        return data


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Tags which upstream text provider produced a value."""

    provider: TextProvider
    value: T


@dataclass
class DishImageResult:
    """Outcome of the image fallback chain. Always usable."""

    url: str
    source: ImageSource
    prompt: str
    query: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"url": self.url, "source": self.source, "prompt": self.prompt}
        if self.query is not None:
            data["query"] = self.query
        return data


@dataclass
class MetadataSuggestion:
    """Suggested recipe metadata from an AI provider or the heuristic."""

    cuisine_type: str
    prep_time_minutes: int
    cook_time_minutes: int
    servings: int
    difficulty: Difficulty
    tags: list[str] = field(default_factory=list)
    nutrition: dict[str, str] | None = None
    allergens: list[str] | None = None
    source: Literal["fallback", "ai"] = "fallback"
    provider: Literal["deepseek", "openai", "fallback"] = "fallback"

    def to_dict(self) -> dict[str, Any]:
        return {
            "cuisineType": self.cuisine_type,
            "prepTimeMinutes": self.prep_time_minutes,
            "cookTimeMinutes": self.cook_time_minutes,
            "servings": self.servings,
            "difficulty": self.difficulty.value,
            "tags": list(self.tags),
            "nutrition": self.nutrition,
            "allergens": self.allergens,
            "source": self.source,
            "provider": self.provider,
        }


@dataclass
class CookNarrative:
    """Short AI-written summary and tips for a cook-now result."""

    summary: str
    tips: list[str]
    provider: TextProvider

    def to_dict(self) -> dict[str, Any]:
        return {"summary": self.summary, "tips": list(self.tips), "provider": self.provider}


@dataclass
class BackfillReport(Generic[T]):
    """Counts and per-recipe updates from a backfill run. Persisting the updates is the caller's job."""

    scanned: int = 0
    updated: int = 0
    failed: int = 0
    updates: list[T] = field(default_factory=list)

    def to_dict(self) -> dict[str, int]:
        return {"scanned": self.scanned, "updated": self.updated, "failed": self.failed}
