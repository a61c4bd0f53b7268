"""
Pytest configuration and fixtures for Pantry Chef tests.
"""

import os

import pytest

# Set test environment before importing pantry_chef modules
os.environ["PANTRY_ENV"] = "development"
os.environ["DEEPSEEK_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

from pantry_chef.config import get_settings
from pantry_chef.core.entities import PantryEntry, RecipeCandidate, RecipeIngredient


@pytest.fixture(autouse=True)
def no_provider_keys(monkeypatch):
    """Every test starts with no AI provider configured."""
    monkeypatch.setenv("DEEPSEEK_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def with_provider_keys(monkeypatch):
    """Both providers configured with fake keys."""
    monkeypatch.setenv("DEEPSEEK_API_KEY", "ds-test-key")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key")
    get_settings.cache_clear()


def make_recipe(recipe_id: str, name: str, ingredients: list[str]) -> RecipeCandidate:
    return RecipeCandidate(
        id=recipe_id,
        name=name,
        ingredients=[RecipeIngredient(name=ingredient) for ingredient in ingredients],
    )


def make_pantry(*names: str) -> list[PantryEntry]:
    return [PantryEntry(name=name) for name in names]


@pytest.fixture
def breakfast_pantry() -> list[PantryEntry]:
    return make_pantry("egg", "milk", "flour")


@pytest.fixture
def breakfast_recipes() -> list[RecipeCandidate]:
    return [
        make_recipe("1", "Pancakes", ["egg", "milk", "flour"]),
        make_recipe("2", "Scramble", ["egg", "butter"]),
    ]


def failing_openai_factory(paths: list[str]):
    """
    Stand-in for the AsyncOpenAI constructor whose every request gets a 500.

    Request paths are appended to `paths`. Constructor arguments (including
    max_retries) pass through to the real client.
    """
    import httpx
    import openai

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(500, json={"error": {"message": "upstream failure"}})

    def factory(**kwargs):
        return openai.AsyncOpenAI(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)), **kwargs)

    return factory
