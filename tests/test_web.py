"""
Tests for the AI API routes.

No provider keys are set, so every endpoint exercises its heuristic path.
The external image lookup is patched out to keep the tests offline.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from pantry_chef.core.entities import CookNarrative
from pantry_chef.web.app import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


KITCHEN = {
    "pantry": [{"name": "Eggs"}, {"name": "bread"}],
    "recipes": [
        {
            "id": "toast",
            "name": "Egg toast",
            "ingredients": [{"name": "egg"}, {"name": "bread"}],
            "cuisineType": "American",
            "prepTimeMinutes": 5,
            "difficulty": "EASY",
        },
        {
            "id": "stew",
            "name": "French stew",
            "ingredients": [{"name": n} for n in ("beef", "potato", "celery", "carrot", "mushroom", "thyme")],
            "cuisineType": "French",
            "prepTimeMinutes": 120,
            "difficulty": "HARD",
        },
    ],
}


class TestCookNowEndpoint:
    """POST /api/ai/cook-now"""

    def test_unfiltered(self, client):
        response = client.post("/api/ai/cook-now", json=KITCHEN)

        assert response.status_code == 200
        body = response.json()
        assert [m["recipeId"] for m in body["canCookNow"]] == ["toast"]
        assert body["canAlmostCook"] == []
        assert body["usedRelaxedFilters"] is False
        assert body["source"] == "fallback"
        assert body["aiNarrative"] is None

    def test_relaxed_when_filters_exclude_matches(self, client):
        response = client.post("/api/ai/cook-now", json={**KITCHEN, "filters": {"cuisineType": "french"}})

        body = response.json()
        assert body["usedRelaxedFilters"] is True
        assert [m["recipeName"] for m in body["canCookNow"]] == ["Egg toast"]
        assert body["reason"]
        assert body["guidance"]

    def test_empty_pantry(self, client):
        with patch("pantry_chef.web.ai_routes.generate_cook_narrative", new_callable=AsyncMock) as narrative:
            response = client.post("/api/ai/cook-now", json={"pantry": [], "recipes": KITCHEN["recipes"]})

        body = response.json()
        assert "pantry is empty" in body["reason"]
        assert body["canCookNow"] == []
        narrative.assert_not_called()

    def test_narrative_marks_source_ai(self, client):
        with patch("pantry_chef.web.ai_routes.generate_cook_narrative", new_callable=AsyncMock) as narrative:
            narrative.return_value = CookNarrative(summary="Make toast", tips=["Butter it"], provider="deepseek")
            body = client.post("/api/ai/cook-now", json=KITCHEN).json()

        assert body["source"] == "ai"
        assert body["aiNarrative"] == {"summary": "Make toast", "tips": ["Butter it"], "provider": "deepseek"}

    def test_invalid_max_prep(self, client):
        response = client.post("/api/ai/cook-now", json={**KITCHEN, "filters": {"maxPrepTimeMinutes": 0}})
        assert response.status_code == 422


class TestMetadataEndpoints:
    """POST /api/ai/metadata and /api/ai/complete-metadata"""

    def test_metadata_fallback(self, client):
        response = client.post(
            "/api/ai/metadata",
            json={
                "name": "Quick Tomato Pasta",
                "ingredients": [{"name": "pasta"}, {"name": "tomato"}, {"name": "basil"}],
                "instructions": "Boil pasta then simmer with tomato sauce and basil.",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["cuisineType"] == "Italian"
        assert body["difficulty"] == "EASY"
        assert body["source"] == "fallback"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "a", "ingredients": [{"name": "egg"}], "instructions": "Whisk and fry the egg."},
            {"name": "Omelette", "ingredients": [], "instructions": "Whisk and fry the egg."},
            {"name": "Omelette", "ingredients": [{"name": "egg"}], "instructions": "Fry."},
        ],
    )
    def test_metadata_validation(self, client, payload):
        assert client.post("/api/ai/metadata", json=payload).status_code == 422

    def test_complete_metadata_keeps_draft_values(self, client):
        response = client.post(
            "/api/ai/complete-metadata",
            json={
                "name": "Tomato pasta",
                "instructions": "Cook pasta.",
                "ingredients": [{"name": "pasta"}, {"name": "tomato"}],
                "servings": 3,
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["servings"] == 3
        assert body["prepTimeMinutes"] == 10
        assert body["difficulty"] == "EASY"
        assert body["aiSuggestedMetadata"]["provider"] == "fallback"
        assert body["isAiMetadataConfirmed"] is False


class TestGenerateImageEndpoint:
    """POST /api/ai/generate-image"""

    def test_placeholder_without_providers(self, client):
        with patch("pantry_chef.llm.providers.external_image_lookup", new_callable=AsyncMock) as lookup:
            lookup.return_value = None
            response = client.post("/api/ai/generate-image", json={"name": "Tomato Soup"})

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "fallback_svg"
        assert body["aiConfigured"] is False
        assert body["image"]["url"].startswith("data:image/svg+xml;base64,")
        assert body["image"]["query"] == "Tomato Soup"

    def test_external_image(self, client):
        with patch("pantry_chef.llm.providers.external_image_lookup", new_callable=AsyncMock) as lookup:
            lookup.return_value = "https://www.themealdb.com/images/soup.jpg"
            body = client.post(
                "/api/ai/generate-image",
                json={"name": "Tomato Soup", "cuisineType": "French", "ingredients": [{"name": "tomato"}]},
            ).json()

        assert body["source"] == "external_fallback"
        assert body["image"]["query"] == "Tomato Soup French tomato"

    def test_style_prompt_too_long(self, client):
        response = client.post("/api/ai/generate-image", json={"name": "Soup", "stylePrompt": "x" * 201})
        assert response.status_code == 422
