from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from cookbook.app.domain.models import AuthenticatedUser, Recipe, RecipeDraft, RecipeQuery
from cookbook.app.infra.db.base import RecipeRepository

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _matches(recipe: Recipe, query: RecipeQuery) -> bool:
    if query.category and recipe.category != query.category:
        return False
    if query.search:
        needle = query.search.casefold()
        return needle in recipe.title.casefold() or needle in recipe.category.casefold()
    return True


class InMemoryRecipeRepository(RecipeRepository):
    """Process-local recipe store. Records are lost on restart."""

    def __init__(self, recipes: Optional[list[Recipe]] = None):
        self._lock = threading.Lock()
        self._counter = itertools.count()
        # recipe_id -> (insertion order, recipe)
        self._rows: dict[str, tuple[int, Recipe]] = {}
        for recipe in recipes or []:
            self._rows[recipe.id] = (next(self._counter), recipe)

    def list_recipes(self, query: RecipeQuery) -> list[Recipe]:
        with self._lock:
            rows = list(self._rows.values())
        rows.sort(key=lambda row: row[0], reverse=True)
        return [replace(recipe) for _, recipe in rows if _matches(recipe, query)]

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        with self._lock:
            row = self._rows.get(recipe_id)
        return replace(row[1]) if row else None

    def create_recipe(self, draft: RecipeDraft, owner: AuthenticatedUser) -> Recipe:
        now = _now_utc()
        recipe = Recipe(
            id=uuid4().hex,
            title=draft.title,
            category=draft.category,
            prep_minutes=draft.prep_minutes,
            image_url=draft.image_url,
            ingredients=list(draft.ingredients),
            instructions=list(draft.instructions),
            owner_id=owner.uid,
            owner_name=owner.name or "",
            owner_email=owner.email or "",
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._rows[recipe.id] = (next(self._counter), recipe)
        logger.info("Created recipe: id=%s, owner=%s", recipe.id, owner.uid)
        return replace(recipe)

    def update_recipe(self, recipe_id: str, draft: RecipeDraft) -> Optional[Recipe]:
        with self._lock:
            row = self._rows.get(recipe_id)
            if row is None:
                return None
            order, current = row
            updated = replace(
                current,
                title=draft.title,
                category=draft.category,
                prep_minutes=draft.prep_minutes,
                image_url=draft.image_url,
                ingredients=list(draft.ingredients),
                instructions=list(draft.instructions),
                updated_at=_now_utc(),
            )
            self._rows[recipe_id] = (order, updated)
        logger.info("Updated recipe: id=%s", recipe_id)
        return replace(updated)

    def delete_recipe(self, recipe_id: str) -> bool:
        with self._lock:
            removed = self._rows.pop(recipe_id, None)
        if removed:
            logger.info("Deleted recipe: id=%s", recipe_id)
        return removed is not None
