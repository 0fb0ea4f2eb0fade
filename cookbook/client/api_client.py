from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from cookbook.client.errors import (
    ApiError,
    ApiValidationError,
    NotOwnerError,
    RecipeNotFound,
    SessionExpiredError,
)
from cookbook.client.models import Recipe, RecipePayload

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        message = data.get("message") or data.get("detail")
        if isinstance(message, str):
            return message
    return None


def _auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class RecipesApiClient:
    """
    Async client for the cookbook REST API.
    Failures surface as ApiError subclasses; there are no retries.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "RecipesApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def list_recipes(self, search: str = "", category: str = "") -> list[Recipe]:
        params: dict[str, str] = {}
        if search:
            params["search"] = search
        if category:
            params["category"] = category

        response = await self._http.get("/recipes", params=params)
        self._raise_for_status(response)
        return [Recipe.model_validate(item) for item in response.json()]

    async def get_recipe(self, recipe_id: str) -> Recipe:
        response = await self._http.get(f"/recipes/{recipe_id}")
        self._raise_for_status(response, recipe_id)
        return Recipe.model_validate(response.json())

    async def create_recipe(self, payload: RecipePayload, token: str) -> Recipe:
        response = await self._http.post(
            "/recipes",
            json=payload.model_dump(),
            headers=_auth_headers(token),
        )
        self._raise_for_status(response)
        return Recipe.model_validate(response.json())

    async def update_recipe(self, recipe_id: str, payload: RecipePayload, token: str) -> Recipe:
        response = await self._http.put(
            f"/recipes/{recipe_id}",
            json=payload.model_dump(),
            headers=_auth_headers(token),
        )
        self._raise_for_status(response, recipe_id)
        return Recipe.model_validate(response.json())

    async def delete_recipe(self, recipe_id: str, token: str) -> None:
        response = await self._http.delete(
            f"/recipes/{recipe_id}",
            headers=_auth_headers(token),
        )
        self._raise_for_status(response, recipe_id)

    @staticmethod
    def _raise_for_status(response: httpx.Response, recipe_id: str = "") -> None:
        if response.is_success:
            return

        message = _error_message(response)
        logger.debug(
            "%s %s -> %d %s",
            response.request.method,
            response.request.url,
            response.status_code,
            message,
        )
        if response.status_code == 400:
            raise ApiValidationError(message or "title and category are required")
        if response.status_code == 401:
            raise SessionExpiredError(message or "Invalid/expired token")
        if response.status_code == 403:
            raise NotOwnerError(message or "You can only modify your own recipes")
        if response.status_code == 404:
            raise RecipeNotFound(recipe_id)
        raise ApiError(response.status_code, message or "Request failed")
