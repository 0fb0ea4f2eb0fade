from __future__ import annotations

import json

import httpx
import pytest

from cookbook.client.api_client import RecipesApiClient
from cookbook.client.errors import (
    ApiError,
    ApiValidationError,
    NotOwnerError,
    RecipeNotFound,
    SessionExpiredError,
)
from cookbook.client.models import RecipePayload

SOUP = {
    "id": "r1",
    "title": "Soup",
    "category": "Soups",
    "prepMinutes": 20,
    "imageUrl": "",
    "ingredients": ["water"],
    "instructions": ["boil"],
    "ownerId": "u1",
    "ownerName": "Alice",
    "ownerEmail": "alice@example.com",
    "createdAt": "2024-01-15T10:00:00Z",
    "recipeId": "ignored-extra",
}


class RecordingHandler:
    def __init__(self, status_code: int = 200, body=None) -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


def _client(handler: RecordingHandler) -> RecipesApiClient:
    return RecipesApiClient("http://api.test/", transport=httpx.MockTransport(handler))


class TestReads:
    @pytest.mark.asyncio
    async def test_list_without_filters_sends_no_params(self) -> None:
        handler = RecordingHandler(body=[SOUP])

        async with _client(handler) as api:
            recipes = await api.list_recipes()

        assert [r.id for r in recipes] == ["r1"]
        assert recipes[0].prepMinutes == 20
        assert handler.requests[0].url.path == "/recipes"
        assert handler.requests[0].url.params == httpx.QueryParams()

    @pytest.mark.asyncio
    async def test_list_with_filters(self) -> None:
        handler = RecordingHandler(body=[])

        async with _client(handler) as api:
            await api.list_recipes(search="past", category="Italian")

        params = handler.requests[0].url.params
        assert params["search"] == "past"
        assert params["category"] == "Italian"

    @pytest.mark.asyncio
    async def test_get_missing_recipe(self) -> None:
        handler = RecordingHandler(404, {"message": "Recipe not found"})

        async with _client(handler) as api:
            with pytest.raises(RecipeNotFound) as exc_info:
                await api.get_recipe("nope")

        assert exc_info.value.recipe_id == "nope"
        assert exc_info.value.status_code == 404


class TestWrites:
    @pytest.mark.asyncio
    async def test_create_sends_bearer_and_body(self) -> None:
        handler = RecordingHandler(201, SOUP)
        payload = RecipePayload(title="Soup", category="Soups", prepMinutes=20)

        async with _client(handler) as api:
            created = await api.create_recipe(payload, "tok")

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer tok"
        assert json.loads(request.content)["title"] == "Soup"
        assert created.ownerName == "Alice"

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        handler = RecordingHandler(200, {"ok": True})

        async with _client(handler) as api:
            await api.delete_recipe("r1", "tok")

        assert handler.requests[0].method == "DELETE"
        assert handler.requests[0].url.path == "/recipes/r1"

    @pytest.mark.parametrize(
        "status, error_type, message",
        [
            (400, ApiValidationError, "title and category are required"),
            (401, SessionExpiredError, "Invalid/expired token"),
            (403, NotOwnerError, "You can only modify your own recipes"),
            (500, ApiError, "Server error"),
        ],
    )
    @pytest.mark.asyncio
    async def test_error_mapping(self, status, error_type, message) -> None:
        handler = RecordingHandler(status, {"message": message})
        payload = RecipePayload(title="Soup", category="Soups")

        async with _client(handler) as api:
            with pytest.raises(error_type) as exc_info:
                await api.update_recipe("r1", payload, "tok")

        assert exc_info.value.status_code == status
        assert exc_info.value.message == message

    @pytest.mark.asyncio
    async def test_fastapi_detail_is_used_as_message(self) -> None:
        handler = RecordingHandler(401, {"detail": "Missing token"})

        async with _client(handler) as api:
            with pytest.raises(SessionExpiredError) as exc_info:
                await api.delete_recipe("r1", "")

        assert exc_info.value.message == "Missing token"
