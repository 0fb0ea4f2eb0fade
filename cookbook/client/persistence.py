# cookbook/client/persistence.py
"""
Local persistence for favorites, kitchen progress and the one-shot toast.

Everything here is a UX nicety: unavailable storage or corrupt values are
logged and treated as "nothing persisted", never raised to the caller.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from cookbook.client.errors import StorageError
from cookbook.client.models import KitchenProgress
from cookbook.client.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoriteRecipes"
KITCHEN_PROGRESS_NAMESPACE = "kitchenProgress"
TOAST_KEY = "toast"


def kitchen_key(recipe_id: str) -> str:
    return f"{KITCHEN_PROGRESS_NAMESPACE}:{recipe_id}"


class LocalPersistenceStore:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # Favorites ---------------------------------------------------------------

    def get_favorites(self) -> set[str]:
        return set(self._favorite_list())

    def is_favorite(self, recipe_id: str) -> bool:
        return recipe_id in self._favorite_list()

    def toggle_favorite(self, recipe_id: str) -> bool:
        """
        Add or remove a recipe from favorites.

        Returns:
            True if the recipe is now a favorite
        """
        favorites = self._favorite_list()
        if recipe_id in favorites:
            updated = [f for f in favorites if f != recipe_id]
            now_favorite = False
        else:
            updated = [*favorites, recipe_id]
            now_favorite = True

        self._write_json(FAVORITES_KEY, updated)
        return now_favorite

    def _favorite_list(self) -> list[str]:
        data = self._read_json(FAVORITES_KEY)
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, str)]

    # Kitchen progress --------------------------------------------------------

    def load_progress(self, recipe_id: str) -> Optional[KitchenProgress]:
        return KitchenProgress.from_dict(self._read_json(kitchen_key(recipe_id)))

    def save_progress(self, recipe_id: str, progress: KitchenProgress) -> None:
        self._write_json(kitchen_key(recipe_id), progress.to_dict())

    def clear_progress(self, recipe_id: str) -> None:
        self._remove(kitchen_key(recipe_id))

    # Toast -------------------------------------------------------------------

    def put_toast(self, message: str) -> None:
        try:
            self._store.set_item(TOAST_KEY, message)
        except StorageError as error:
            logger.warning("Dropping toast %r: %s", message, error)

    def pop_toast(self) -> Optional[str]:
        """Read the pending toast once and delete it."""
        try:
            message = self._store.get_item(TOAST_KEY)
        except StorageError as error:
            logger.warning("Could not read toast: %s", error)
            return None
        if message is None:
            return None
        self._remove(TOAST_KEY)
        return message or None

    # Helpers -----------------------------------------------------------------

    def _read_json(self, key: str) -> Any:
        try:
            raw = self._store.get_item(key)
        except StorageError as error:
            logger.warning("Ignoring unreadable %s: %s", key, error)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt JSON under %s", key)
            return None

    def _write_json(self, key: str, value: Any) -> None:
        try:
            self._store.set_item(key, json.dumps(value))
        except StorageError as error:
            logger.warning("Could not persist %s: %s", key, error)

    def _remove(self, key: str) -> None:
        try:
            self._store.remove_item(key)
        except StorageError as error:
            logger.warning("Could not remove %s: %s", key, error)
