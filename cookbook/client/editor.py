# cookbook/client/editor.py
"""
Create, edit and delete flows behind the recipe form.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol

from cookbook.client.errors import ApiError, NotOwnerError, SessionExpiredError
from cookbook.client.models import Recipe, RecipePayload
from cookbook.client.persistence import LocalPersistenceStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Title and Category are required"
LOGIN_FIRST_TOAST = "Please login first 🔐"
SESSION_EXPIRED_TOAST = "Session expired — please login again 🔐"
NOT_OWNER_MESSAGE = "You can only edit your own recipes."
CREATED_TOAST = "Recipe created ✅"
UPDATED_TOAST = "Recipe updated ✅"
DELETE_PROMPT = "Delete this recipe?"

TokenGetter = Callable[[], Awaitable[Optional[str]]]
Confirm = Callable[[str], bool]


class RecipeWriter(Protocol):
    async def get_recipe(self, recipe_id: str) -> Recipe: ...
    async def create_recipe(self, payload: RecipePayload, token: str) -> Recipe: ...
    async def update_recipe(self, recipe_id: str, payload: RecipePayload, token: str) -> Recipe: ...
    async def delete_recipe(self, recipe_id: str, token: str) -> None: ...


@dataclass
class RecipeForm:
    title: str = ""
    category: str = ""
    prep_minutes: Any = 0
    image_url: str = ""
    ingredients_text: str = ""
    instructions_text: str = ""

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeForm":
        return cls(
            title=recipe.title or "",
            category=recipe.category or "",
            prep_minutes=_to_minutes(recipe.prepMinutes),
            image_url=recipe.imageUrl or "",
            ingredients_text="\n".join(recipe.ingredients),
            instructions_text="\n".join(recipe.instructions),
        )


def _split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def _to_minutes(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return int(number) if math.isfinite(number) and number > 0 else 0


def parse_form(form: RecipeForm) -> RecipePayload:
    return RecipePayload(
        title=form.title.strip(),
        category=form.category.strip(),
        prepMinutes=_to_minutes(form.prep_minutes),
        imageUrl=form.image_url.strip(),
        ingredients=_split_lines(form.ingredients_text),
        instructions=_split_lines(form.instructions_text),
    )


class Outcome(str, Enum):
    SAVED = "saved"
    DELETED = "deleted"
    CANCELLED = "cancelled"
    LOGIN_REQUIRED = "login_required"
    ERROR = "error"


@dataclass
class EditorResult:
    outcome: Outcome
    recipe: Optional[Recipe] = None
    error: Optional[str] = None


class RecipeEditor:
    def __init__(
        self,
        api: RecipeWriter,
        get_token: TokenGetter,
        persistence: LocalPersistenceStore,
    ) -> None:
        self._api = api
        self._get_token = get_token
        self._persistence = persistence

    async def load_for_edit(self, recipe_id: str) -> RecipeForm:
        return RecipeForm.from_recipe(await self._api.get_recipe(recipe_id))

    async def submit(self, form: RecipeForm, recipe_id: Optional[str] = None) -> EditorResult:
        """
        Create (no ``recipe_id``) or update a recipe.
        Success and login redirects leave a toast for the next page.
        """
        payload = parse_form(form)
        if not payload.title or not payload.category:
            return EditorResult(Outcome.ERROR, error=REQUIRED_FIELDS_MESSAGE)

        token = await self._get_token()
        if not token:
            self._persistence.put_toast(LOGIN_FIRST_TOAST)
            return EditorResult(Outcome.LOGIN_REQUIRED)

        try:
            if recipe_id:
                saved = await self._api.update_recipe(recipe_id, payload, token)
            else:
                saved = await self._api.create_recipe(payload, token)
        except SessionExpiredError:
            self._persistence.put_toast(SESSION_EXPIRED_TOAST)
            return EditorResult(Outcome.LOGIN_REQUIRED)
        except NotOwnerError:
            return EditorResult(Outcome.ERROR, error=NOT_OWNER_MESSAGE)
        except ApiError as error:
            logger.info("Saving recipe failed: %s", error.message)
            return EditorResult(Outcome.ERROR, error=error.message or "Failed to save recipe")

        self._persistence.put_toast(UPDATED_TOAST if recipe_id else CREATED_TOAST)
        return EditorResult(Outcome.SAVED, recipe=saved)

    async def delete(self, recipe_id: str, confirm: Confirm) -> EditorResult:
        if not confirm(DELETE_PROMPT):
            return EditorResult(Outcome.CANCELLED)

        token = await self._get_token()
        if not token:
            self._persistence.put_toast(LOGIN_FIRST_TOAST)
            return EditorResult(Outcome.LOGIN_REQUIRED)

        try:
            await self._api.delete_recipe(recipe_id, token)
        except SessionExpiredError:
            self._persistence.put_toast(SESSION_EXPIRED_TOAST)
            return EditorResult(Outcome.LOGIN_REQUIRED)
        except ApiError as error:
            return EditorResult(Outcome.ERROR, error=error.message or "Failed to delete")

        return EditorResult(Outcome.DELETED)
