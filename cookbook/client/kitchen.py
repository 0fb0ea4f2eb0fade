# cookbook/client/kitchen.py
"""
Recipe detail view with kitchen-mode checklist tracking.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol

from cookbook.client.models import KitchenProgress, Recipe
from cookbook.client.persistence import LocalPersistenceStore

logger = logging.getLogger(__name__)

RESET_PROMPT = "Reset kitchen progress for this recipe?"
SHARED_TOAST = "Shared ✅"
LINK_COPIED_TOAST = "Link copied ✅"
COPY_FAILED_TOAST = "Couldn’t copy link ❌"

Confirm = Callable[[str], bool]
NativeShare = Callable[[dict[str, str]], Awaitable[Any]]
CopyLink = Callable[[str], Any]


class RecipeLookup(Protocol):
    async def get_recipe(self, recipe_id: str) -> Recipe:
        ...


class ViewState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not_found"


def completion_percent(progress: KitchenProgress) -> int:
    total = progress.total_count
    if total == 0:
        return 0
    return math.floor(100 * progress.done_count / total + 0.5)


def share_payload(recipe: Recipe, url: str) -> dict[str, str]:
    return {
        "title": recipe.title,
        "text": f"Check out this recipe: {recipe.title}",
        "url": url,
    }


class RecipeView:
    """
    State machine for one recipe page.

    LOADING -> LOADED, or LOADING -> NOT_FOUND (terminal). Once loaded, every
    checklist toggle is written straight to local persistence.
    """

    def __init__(self, api: RecipeLookup, persistence: LocalPersistenceStore) -> None:
        self._api = api
        self._persistence = persistence
        self.state = ViewState.LOADING
        self.recipe: Optional[Recipe] = None
        self.progress = KitchenProgress()
        self.kitchen_mode = False

    async def load(self, recipe_id: str) -> ViewState:
        self.state = ViewState.LOADING
        self.recipe = None
        try:
            recipe = await self._api.get_recipe(recipe_id)
        except Exception as error:
            logger.info("Recipe %s unavailable: %s", recipe_id, error)
            self.state = ViewState.NOT_FOUND
            return self.state

        self.recipe = recipe
        stored = self._persistence.load_progress(recipe.id) or KitchenProgress()
        self.progress = stored.resized(len(recipe.ingredients), len(recipe.instructions))
        self.state = ViewState.LOADED
        return self.state

    @property
    def author(self) -> Optional[str]:
        if self.recipe is None:
            return None
        return self.recipe.ownerName or self.recipe.ownerEmail or None

    @property
    def completion_percent(self) -> int:
        return completion_percent(self.progress)

    def toggle_kitchen_mode(self) -> bool:
        self.kitchen_mode = not self.kitchen_mode
        return self.kitchen_mode

    def toggle_ingredient(self, index: int) -> bool:
        return self._toggle(self.progress.ingredients_done, index)

    def toggle_step(self, index: int) -> bool:
        return self._toggle(self.progress.steps_done, index)

    def reset(self, confirm: Confirm) -> bool:
        """
        Clear both checklists and forget the stored record.
        Nothing happens unless ``confirm`` approves.
        """
        recipe = self._require_loaded()
        if not confirm(RESET_PROMPT):
            return False
        self.progress = KitchenProgress.empty(
            len(self.progress.ingredients_done), len(self.progress.steps_done)
        )
        self._persistence.clear_progress(recipe.id)
        return True

    async def share(
        self,
        url: str,
        native_share: Optional[NativeShare] = None,
        copy_link: Optional[CopyLink] = None,
    ) -> str:
        """
        Share the recipe link, falling back to copying it.

        Returns:
            The toast message describing what happened
        """
        recipe = self._require_loaded()
        if native_share is not None:
            try:
                await native_share(share_payload(recipe, url))
                return SHARED_TOAST
            except Exception as error:
                logger.info("Native share failed, copying link instead: %s", error)

        if copy_link is None:
            return COPY_FAILED_TOAST
        try:
            copy_link(url)
        except Exception as error:
            logger.warning("Could not copy link: %s", error)
            return COPY_FAILED_TOAST
        return LINK_COPIED_TOAST

    def _toggle(self, flags: list[bool], index: int) -> bool:
        recipe = self._require_loaded()
        if index < 0 or index >= len(flags):
            raise IndexError(f"checklist index out of range: {index}")
        flags[index] = not flags[index]
        self._persistence.save_progress(recipe.id, self.progress)
        return flags[index]

    def _require_loaded(self) -> Recipe:
        if self.state is not ViewState.LOADED or self.recipe is None:
            raise RuntimeError(f"recipe view is {self.state.value}, not loaded")
        return self.recipe
