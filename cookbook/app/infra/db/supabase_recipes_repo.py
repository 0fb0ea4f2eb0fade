from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from supabase import Client

from cookbook.app.domain.errors import RecipeRepositoryError
from cookbook.app.domain.models import AuthenticatedUser, Recipe, RecipeDraft, RecipeQuery
from cookbook.app.infra.db.base import RecipeRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "recipe_id,title,category,prep_minutes,image_url,ingredients,instructions,"
    "owner_id,owner_name,owner_email,created_at,updated_at"
)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _safe_int(value: object, default: int = 0) -> int:
    try:
        return int(value) if value else default
    except (TypeError, ValueError):
        return default


def _safe_str(value: object) -> str:
    return str(value) if value else ""


def _safe_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except (TypeError, ValueError):
        return False
    return True


def _row_to_recipe(row: dict[str, Any]) -> Recipe:
    return Recipe(
        id=str(row["recipe_id"]),
        title=_safe_str(row.get("title")),
        category=_safe_str(row.get("category")),
        prep_minutes=_safe_int(row.get("prep_minutes")),
        image_url=_safe_str(row.get("image_url")),
        ingredients=_safe_list(row.get("ingredients")),
        instructions=_safe_list(row.get("instructions")),
        owner_id=_safe_str(row.get("owner_id")),
        owner_name=_safe_str(row.get("owner_name")),
        owner_email=_safe_str(row.get("owner_email")),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _matches_search(recipe: Recipe, search: str) -> bool:
    needle = search.casefold()
    return needle in recipe.title.casefold() or needle in recipe.category.casefold()


def _draft_to_row(draft: RecipeDraft) -> dict[str, Any]:
    return {
        "title": draft.title,
        "category": draft.category,
        "prep_minutes": draft.prep_minutes,
        "image_url": draft.image_url,
        "ingredients": list(draft.ingredients),
        "instructions": list(draft.instructions),
    }


def ilike_or_filter(search: str) -> str:
    """
    Build a PostgREST ``or`` filter matching ``search`` inside title or
    category, ignoring case.

    PostgREST reads ``*`` as a wildcard and has no escape for it, so ``*`` is
    dropped here and callers must re-check matches with ``_matches_search``.
    """
    pattern = search.replace("*", "")
    pattern = pattern.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    quoted = pattern.replace("\\", "\\\\").replace('"', '\\"')
    value = f'"*{quoted}*"'
    return f"title.ilike.{value},category.ilike.{value}"


class SupabaseRecipeRepository(RecipeRepository):
    TABLE_NAME = "recipes"

    def __init__(self, client: Client, table_name: str | None = None):
        self._client = client
        self._table = table_name or self.TABLE_NAME
        logger.info("SupabaseRecipeRepository initialized: table=%s", self._table)

    def list_recipes(self, query: RecipeQuery) -> list[Recipe]:
        builder = self._client.table(self._table).select(_COLUMNS)
        if query.category:
            builder = builder.eq("category", query.category)
        if query.search.replace("*", ""):
            builder = builder.or_(ilike_or_filter(query.search))

        try:
            result = builder.order("created_at", desc=True).execute()
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error listing recipes: %s", error)
            raise RecipeRepositoryError("list", str(error)) from error

        recipes = [_row_to_recipe(row) for row in result.data or []]
        if query.search:
            recipes = [r for r in recipes if _matches_search(r, query.search)]
        return recipes

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        if not _is_uuid(recipe_id):
            return None

        try:
            result = (
                self._client.table(self._table)
                .select(_COLUMNS)
                .eq("recipe_id", recipe_id)
                .limit(1)
                .execute()
            )
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error fetching recipe %s: %s", recipe_id, error)
            raise RecipeRepositoryError("get", str(error)) from error

        if not result.data:
            return None
        return _row_to_recipe(result.data[0])

    def create_recipe(self, draft: RecipeDraft, owner: AuthenticatedUser) -> Recipe:
        now = _now_utc().isoformat()
        row = {
            "recipe_id": str(uuid4()),
            **_draft_to_row(draft),
            "owner_id": owner.uid,
            "owner_name": owner.name or "",
            "owner_email": owner.email or "",
            "created_at": now,
            "updated_at": now,
        }

        try:
            result = self._client.table(self._table).insert(row).execute()
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error creating recipe: %s", error)
            raise RecipeRepositoryError("create", str(error)) from error

        if not result.data:
            raise RecipeRepositoryError("create", "insert returned no rows")

        recipe = _row_to_recipe(result.data[0])
        logger.info("Created recipe: id=%s, owner=%s", recipe.id, owner.uid)
        return recipe

    def update_recipe(self, recipe_id: str, draft: RecipeDraft) -> Optional[Recipe]:
        if not _is_uuid(recipe_id):
            return None

        changes = {**_draft_to_row(draft), "updated_at": _now_utc().isoformat()}
        try:
            result = (
                self._client.table(self._table)
                .update(changes)
                .eq("recipe_id", recipe_id)
                .execute()
            )
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error updating recipe %s: %s", recipe_id, error)
            raise RecipeRepositoryError("update", str(error)) from error

        if not result.data:
            return None
        logger.info("Updated recipe: id=%s", recipe_id)
        return _row_to_recipe(result.data[0])

    def delete_recipe(self, recipe_id: str) -> bool:
        if not _is_uuid(recipe_id):
            return False

        try:
            result = (
                self._client.table(self._table)
                .delete()
                .eq("recipe_id", recipe_id)
                .execute()
            )
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error deleting recipe %s: %s", recipe_id, error)
            raise RecipeRepositoryError("delete", str(error)) from error

        deleted = bool(result.data)
        if deleted:
            logger.info("Deleted recipe: id=%s", recipe_id)
        return deleted
