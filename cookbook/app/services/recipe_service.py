# cookbook/app/services/recipe_service.py
"""
Recipe management service.
Validates payloads, enforces ownership and talks to the recipe repository.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from cookbook.app.domain.errors import (
    AuthorizationError,
    RecipeNotFoundError,
    RecipeValidationError,
)
from cookbook.app.domain.models import AuthenticatedUser, Recipe, RecipeDraft, RecipeQuery
from cookbook.app.domain.ownership import Decision, authorize
from cookbook.app.infra.db.base import RecipeRepository

logger = logging.getLogger(__name__)


def _clean_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""


def _to_minutes(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(number)


def _to_lines(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    lines: list[str] = []
    for item in value:
        text = _clean_str(item)
        if text:
            lines.append(text)
    return lines


def build_draft(payload: Mapping[str, Any]) -> RecipeDraft:
    """
    Turn a request body into a RecipeDraft.

    Raises:
        RecipeValidationError: If title or category is missing or blank
    """
    title = _clean_str(payload.get("title"))
    category = _clean_str(payload.get("category"))
    if not title or not category:
        raise RecipeValidationError()

    return RecipeDraft(
        title=title,
        category=category,
        prep_minutes=_to_minutes(payload.get("prepMinutes")),
        image_url=_clean_str(payload.get("imageUrl")),
        ingredients=_to_lines(payload.get("ingredients")),
        instructions=_to_lines(payload.get("instructions")),
    )


class RecipeService:
    """
    Service for recipe CRUD.

    Responsibilities:
    - Public listing and lookup
    - Required-field validation on create/update
    - Ownership stamping on create
    - Ownership checks on update/delete (404 before 403)
    """

    def __init__(self, repository: RecipeRepository):
        self._repo = repository

    def list_recipes(self, search: str = "", category: str = "") -> list[Recipe]:
        query = RecipeQuery(search=search.strip(), category=category.strip())
        return self._repo.list_recipes(query)

    def get_recipe(self, recipe_id: str) -> Recipe:
        recipe = self._repo.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    def create_recipe(self, payload: Mapping[str, Any], caller: AuthenticatedUser) -> Recipe:
        draft = build_draft(payload)
        return self._repo.create_recipe(draft, caller)

    def update_recipe(
        self,
        recipe_id: str,
        payload: Mapping[str, Any],
        caller: AuthenticatedUser,
    ) -> Recipe:
        """
        Replace a recipe's editable fields.

        Raises:
            RecipeValidationError: If required fields are missing
            RecipeNotFoundError: If the recipe does not exist
            AuthorizationError: If the caller does not own the recipe
        """
        draft = build_draft(payload)
        self._ensure_owner(recipe_id, caller)

        updated = self._repo.update_recipe(recipe_id, draft)
        if updated is None:
            raise RecipeNotFoundError(recipe_id)
        return updated

    def delete_recipe(self, recipe_id: str, caller: AuthenticatedUser) -> None:
        self._ensure_owner(recipe_id, caller)
        if not self._repo.delete_recipe(recipe_id):
            raise RecipeNotFoundError(recipe_id)

    def _ensure_owner(self, recipe_id: str, caller: AuthenticatedUser) -> Recipe:
        recipe = self.get_recipe(recipe_id)
        if authorize(recipe.owner_id, caller.uid) is not Decision.ALLOW:
            logger.info(
                "Mutation denied: recipe=%s, owner=%s, caller=%s",
                recipe_id,
                recipe.owner_id or "<legacy>",
                caller.uid,
            )
            raise AuthorizationError()
        return recipe
