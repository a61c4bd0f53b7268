"""
Tests for the cook-now classifier and the filter relaxation strategy.
"""

from pantry_chef.cook_now.classifier import classify
from pantry_chef.cook_now.evaluation import (
    EMPTY_PANTRY_GUIDANCE,
    FILTERED_OUT_GUIDANCE,
    FILTERED_OUT_REASON,
    NO_MATCH_GUIDANCE,
    NO_MATCH_REASON,
    RELAXED_GUIDANCE,
    RELAXED_REASON,
    evaluate_cook_now,
    filter_recipes,
)
from pantry_chef.core.entities import AssistantFilters, Difficulty, FilterableRecipe, RecipeIngredient

from conftest import make_pantry, make_recipe

FRENCH_STEW = make_recipe("2", "French stew", ["beef", "potato", "celery", "carrot", "mushroom", "thyme"])
EGG_TOAST = make_recipe("1", "Egg toast", ["egg", "bread"])


def _ids(matches) -> list[str]:
    return [match.recipe_id for match in matches]


class TestClassify:
    """Tier assignment for a single pass."""

    def test_pancakes_and_scramble(self, breakfast_pantry, breakfast_recipes):
        result = classify(breakfast_pantry, breakfast_recipes)

        assert [m.recipe_name for m in result.can_cook_now] == ["Pancakes"]
        assert [m.recipe_name for m in result.can_almost_cook] == ["Scramble"]
        assert result.can_almost_cook[0].missing_ingredients == ["butter"]
        assert result.shopping_list == ["butter"]
        assert result.source == "fallback"

    def test_can_cook_now_has_no_missing(self, breakfast_pantry, breakfast_recipes):
        result = classify(breakfast_pantry, breakfast_recipes)
        assert all(match.missing_ingredients == [] for match in result.can_cook_now)

    def test_substitutions_for_missing(self, breakfast_pantry, breakfast_recipes):
        result = classify(breakfast_pantry, breakfast_recipes)
        assert result.can_almost_cook[0].substitutions == ["butter -> olive oil", "butter -> coconut oil"]

    def test_missing_keeps_original_text(self):
        pantry = make_pantry("eggs")
        recipes = [make_recipe("1", "Omelette", ["Eggs", "Fresh Chives"])]

        result = classify(pantry, recipes)

        assert result.can_almost_cook[0].missing_ingredients == ["Fresh Chives"]

    def test_too_far_is_excluded(self):
        """Four of six missing: more than 3 missing and under 55% covered."""
        pantry = make_pantry("beef", "potato")
        result = classify(pantry, [FRENCH_STEW])

        assert result.can_cook_now == []
        assert result.can_almost_cook == []
        assert result.shopping_list == []

    def test_many_missing_but_high_completion(self):
        """Four missing out of ten is still 60% covered."""
        covered = ["rice", "onion", "garlic", "stock", "butter", "parmesan"]
        missing = ["saffron", "sumac", "mace", "nutmeg"]
        recipe = make_recipe("big", "Feast", covered + missing)

        result = classify(make_pantry(*covered), [recipe])

        assert _ids(result.can_almost_cook) == ["big"]
        assert result.can_almost_cook[0].missing_ingredients == missing

    def test_recipe_without_ingredients_is_cookable(self):
        result = classify(make_pantry("salt"), [make_recipe("w", "Water", [])])
        assert _ids(result.can_cook_now) == ["w"]

    def test_shopping_list_sorted_and_deduplicated(self):
        pantry = make_pantry("egg")
        recipes = [
            make_recipe("1", "Scramble", ["egg", "butter", "chives"]),
            make_recipe("2", "Fried egg", ["egg", "butter"]),
            make_recipe("3", "Egg salad", ["egg", "mayonnaise", "chives"]),
        ]

        result = classify(pantry, recipes)

        assert result.shopping_list == ["butter", "chives", "mayonnaise"]
        union = {name for match in result.can_almost_cook for name in match.missing_ingredients}
        assert result.shopping_list == sorted(union)

    def test_each_recipe_in_at_most_one_tier(self, breakfast_pantry, breakfast_recipes):
        recipes = breakfast_recipes + [FRENCH_STEW, EGG_TOAST]
        result = classify(breakfast_pantry, recipes)

        now = set(_ids(result.can_cook_now))
        almost = set(_ids(result.can_almost_cook))
        assert now.isdisjoint(almost)
        assert now | almost <= {recipe.id for recipe in recipes}

    def test_empty_inputs(self):
        result = classify([], [])
        assert result.can_cook_now == [] and result.can_almost_cook == [] and result.shopping_list == []


class TestEvaluateCookNow:
    """Strict pass, relaxed retry and user guidance."""

    def test_empty_pantry(self):
        result = evaluate_cook_now(
            pantry=[],
            strict_recipes=[EGG_TOAST],
            relaxed_recipes=[],
            filters=AssistantFilters(),
        )

        assert "pantry is empty" in result.reason
        assert result.guidance == EMPTY_PANTRY_GUIDANCE
        assert result.can_cook_now == []
        assert result.can_almost_cook == []
        assert result.used_relaxed_filters is False

    def test_strict_matches_have_no_reason(self, breakfast_pantry, breakfast_recipes):
        result = evaluate_cook_now(breakfast_pantry, breakfast_recipes, filters=AssistantFilters(cuisine_type="american"))

        assert _ids(result.can_cook_now) == ["1"]
        assert result.reason == ""
        assert result.guidance == ""
        assert result.used_relaxed_filters is False

    def test_relaxed_pass_when_filters_block_everything(self):
        result = evaluate_cook_now(
            pantry=make_pantry("egg", "bread"),
            strict_recipes=[FRENCH_STEW],
            relaxed_recipes=[EGG_TOAST],
            filters=AssistantFilters(cuisine_type="french", max_prep_time_minutes=15),
        )

        assert result.used_relaxed_filters is True
        assert [m.recipe_name for m in result.can_cook_now] == ["Egg toast"]
        assert result.reason == RELAXED_REASON
        assert result.guidance == RELAXED_GUIDANCE

    def test_relaxed_pass_also_empty(self):
        result = evaluate_cook_now(
            pantry=make_pantry("egg"),
            strict_recipes=[FRENCH_STEW],
            relaxed_recipes=[FRENCH_STEW],
            filters=AssistantFilters(difficulty=Difficulty.EASY),
        )

        assert result.used_relaxed_filters is False
        assert result.reason == FILTERED_OUT_REASON
        assert result.guidance == FILTERED_OUT_GUIDANCE
        assert result.can_cook_now == [] and result.can_almost_cook == []

    def test_no_relaxation_without_filters(self):
        result = evaluate_cook_now(
            pantry=make_pantry("egg", "bread"),
            strict_recipes=[FRENCH_STEW],
            relaxed_recipes=[EGG_TOAST],
            filters=AssistantFilters(),
        )

        assert result.used_relaxed_filters is False
        assert result.can_cook_now == []
        assert result.reason == NO_MATCH_REASON
        assert result.guidance == NO_MATCH_GUIDANCE

    def test_no_relaxation_without_relaxed_set(self):
        for relaxed in (None, []):
            result = evaluate_cook_now(
                pantry=make_pantry("egg", "bread"),
                strict_recipes=[FRENCH_STEW],
                relaxed_recipes=relaxed,
                filters=AssistantFilters(cuisine_type="french"),
            )
            assert result.used_relaxed_filters is False
            assert result.reason == NO_MATCH_REASON

    def test_empty_pantry_checked_before_filters(self):
        result = evaluate_cook_now(
            pantry=[],
            strict_recipes=[],
            relaxed_recipes=[EGG_TOAST],
            filters=AssistantFilters(cuisine_type="french"),
        )
        assert result.used_relaxed_filters is False
        assert "pantry is empty" in result.reason

    def test_to_dict_wire_shape(self, breakfast_pantry, breakfast_recipes):
        data = evaluate_cook_now(breakfast_pantry, breakfast_recipes).to_dict()

        assert set(data) == {
            "canCookNow",
            "canAlmostCook",
            "shoppingList",
            "source",
            "usedRelaxedFilters",
            "reason",
            "guidance",
        }
        assert data["canAlmostCook"][0] == {
            "recipeId": "2",
            "recipeName": "Scramble",
            "missingIngredients": ["butter"],
            "substitutions": ["butter -> olive oil", "butter -> coconut oil"],
        }


class TestFilterRecipes:
    """Strict candidate set derived from assistant filters."""

    def _recipe(self, recipe_id, cuisine=None, prep=None, difficulty=None):
        return FilterableRecipe(
            id=recipe_id,
            name=recipe_id,
            ingredients=[RecipeIngredient(name="egg")],
            cuisine_type=cuisine,
            prep_time_minutes=prep,
            difficulty=difficulty,
        )

    def test_no_filters_keeps_everything(self):
        recipes = [self._recipe("a"), self._recipe("b", cuisine="French")]
        assert filter_recipes(recipes, AssistantFilters()) == recipes

    def test_cuisine_is_case_insensitive_substring(self):
        recipes = [self._recipe("a", cuisine="French Provincial"), self._recipe("b", cuisine="Italian"), self._recipe("c")]
        kept = filter_recipes(recipes, AssistantFilters(cuisine_type="french"))
        assert [r.id for r in kept] == ["a"]

    def test_max_prep_is_inclusive(self):
        recipes = [self._recipe("a", prep=15), self._recipe("b", prep=16), self._recipe("c")]
        kept = filter_recipes(recipes, AssistantFilters(max_prep_time_minutes=15))
        assert [r.id for r in kept] == ["a"]

    def test_difficulty_exact(self):
        recipes = [self._recipe("a", difficulty=Difficulty.EASY), self._recipe("b", difficulty=Difficulty.HARD)]
        kept = filter_recipes(recipes, AssistantFilters(difficulty=Difficulty.HARD))
        assert [r.id for r in kept] == ["b"]

    def test_has_filters(self):
        assert AssistantFilters().has_filters() is False
        assert AssistantFilters(max_prep_time_minutes=0).has_filters() is False
        assert AssistantFilters(cuisine_type="thai").has_filters() is True
