import json

import httpx
import pytest
from fastapi import HTTPException

from savorycircle.main import app
from savorycircle.modules.suggestions import routes as suggestion_routes
from savorycircle.modules.suggestions.openrouter import OpenRouterClient
from savorycircle.modules.suggestions.parser import parse_meal_suggestions, parse_recipe_json
from savorycircle.modules.suggestions.service import SuggestionService
from tests.conftest import make_food


MEAL_TEXT = """Here are some ideas:

Name: Veggie Stir Fry
Description: Quick and colorful.
Ingredients:
- broccoli
- soy sauce
Recipe Instructions:
1. Chop the vegetables.
2. Stir fry for five minutes.

**Name:** Tomato Soup
Description: Comforting.
Ingredients: tomatoes, onion, cream
Recipe Instructions:
1. Simmer everything.
Enjoy!
"""

RECIPES = [
    {
        "name": "Curry Bowl",
        "ingredients": ["rice", "curry paste"],
        "instructions": ["Cook rice", "Add curry"],
        "prepTime": "10 minutes",
        "cookTime": "20 minutes",
        "servings": 2,
    }
]


def chat_handler(content=None, status=200, seen=None, error=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if error is not None:
            raise error
        if status != 200:
            return httpx.Response(status, json={"error": {"message": "Rate limited"}})
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    return handler


def _service():
    return SuggestionService(OpenRouterClient(api_key="or-key", api_url="https://ai.test/chat", timeout=5))


def test_parse_meal_suggestions_handles_bullets_and_comma_lists():
    suggestions = parse_meal_suggestions(MEAL_TEXT)
    assert suggestions == [
        {
            "name": "Veggie Stir Fry",
            "description": "Quick and colorful.",
            "ingredients": ["broccoli", "soy sauce"],
            "recipe": ["Chop the vegetables.", "Stir fry for five minutes."],
        },
        {
            "name": "Tomato Soup",
            "description": "Comforting.",
            "ingredients": ["tomatoes", "onion", "cream"],
            "recipe": ["Simmer everything."],
        },
    ]


def test_parse_meal_suggestions_without_names():
    assert parse_meal_suggestions("Sorry, I cannot help with that.") == []


def test_parse_recipe_json_accepts_code_fence():
    fenced = "```json\n" + json.dumps(RECIPES) + "\n```"
    assert parse_recipe_json(fenced) == RECIPES


def test_parse_recipe_json_rejects_prose():
    with pytest.raises(ValueError):
        parse_recipe_json("Here is a recipe for you!")


@pytest.mark.asyncio
async def test_meal_suggestions_request_and_parse(mock_http):
    seen = []
    mock_http(chat_handler(MEAL_TEXT, seen=seen))

    result = await _service().meal_suggestions("  something quick  ")

    assert [s.name for s in result.suggestions] == ["Veggie Stir Fry", "Tomato Soup"]
    request = seen[0]
    assert request.headers["Authorization"] == "Bearer or-key"
    assert request.headers["X-Title"] == "SavoryCircle"
    assert request.headers["HTTP-Referer"] == "http://localhost:3000"
    payload = json.loads(request.content)
    assert payload["model"] == "mistralai/mistral-7b-instruct:free"
    assert payload["temperature"] == 0.7
    assert payload["max_tokens"] == 500
    assert payload["messages"][0]["role"] == "system"
    assert payload["messages"][1] == {"role": "user", "content": "something quick"}


@pytest.mark.asyncio
async def test_meal_suggestions_timeout_is_408(mock_http):
    mock_http(chat_handler(error=httpx.ReadTimeout("too slow")))
    with pytest.raises(HTTPException) as exc:
        await _service().meal_suggestions("dinner")
    assert exc.value.status_code == 408
    assert exc.value.detail == "Request took too long to complete. Please try again."


@pytest.mark.asyncio
async def test_meal_suggestions_unparsable_answer_is_500(mock_http):
    mock_http(chat_handler("I like food."))
    with pytest.raises(HTTPException) as exc:
        await _service().meal_suggestions("dinner")
    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_recipe_suggestions_parse_json(mock_http):
    seen = []
    mock_http(chat_handler(json.dumps(RECIPES), seen=seen))
    recipes = await _service().recipe_suggestions(["curry", "rice"], count=1)
    assert recipes[0].name == "Curry Bowl"
    assert recipes[0].servings == 2
    payload = json.loads(seen[0].content)
    assert payload["model"] == "deepseek/deepseek-r1:free"
    assert "curry, rice" in payload["messages"][0]["content"]


@pytest.mark.asyncio
async def test_recipe_suggestions_propagate_upstream_status(mock_http):
    mock_http(chat_handler(status=429))
    with pytest.raises(HTTPException) as exc:
        await _service().recipe_suggestions(["curry"])
    assert exc.value.status_code == 429


@pytest.mark.asyncio
async def test_recipe_suggestions_bad_json_is_500(mock_http):
    mock_http(chat_handler("not json at all"))
    with pytest.raises(HTTPException) as exc:
        await _service().recipe_suggestions(["curry"])
    assert exc.value.status_code == 500
    assert exc.value.detail == "Failed to parse recipe JSON"


@pytest.mark.asyncio
async def test_unconfigured_client_is_500():
    service = SuggestionService(OpenRouterClient(api_key="", api_url="https://ai.test/chat"))
    with pytest.raises(HTTPException) as exc:
        await service.recipe_suggestions(["curry"])
    assert exc.value.detail == "API configuration missing"


def test_meal_route_requires_prompt(client):
    app.dependency_overrides[suggestion_routes.get_suggestion_service] = _service
    response = client.post("/api/v1/suggestions/meals", json={"prompt": "   "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Prompt is required"


def test_recipe_route_falls_back_to_my_favorites(client, fake_db, mock_http):
    seen = []
    mock_http(chat_handler(json.dumps(RECIPES), seen=seen))
    fake_db.tables["favorite_foods"] = [make_food("f1", name="Lasagna"), make_food("f2", name="Tacos")]
    app.dependency_overrides[suggestion_routes.get_suggestion_service] = _service

    response = client.post("/api/v1/suggestions/recipes", json={"count": 1})

    assert response.status_code == 200
    assert response.json()[0]["name"] == "Curry Bowl"
    prompt = json.loads(seen[0].content)["messages"][0]["content"]
    assert "Lasagna" in prompt and "Tacos" in prompt
