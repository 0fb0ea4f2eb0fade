# cookbook/client/pipeline.py
"""
Client-side filter and sort applied to the list returned by the server.
All functions are pure: they return new lists and never touch their input.
"""
from __future__ import annotations

import locale
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from cookbook.client.models import Recipe

DEFAULT_MAX_MINUTES = 180
MIN_MAX_MINUTES = 0
MAX_MAX_MINUTES = 9999


class SortMode(str, Enum):
    NEWEST = "newest"
    FASTEST = "fastest"
    AZ = "az"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def prep_minutes(recipe: Recipe) -> float:
    """Prep time with missing or non-finite values read as 0."""
    value = recipe.prepMinutes
    if value is None or not math.isfinite(value):
        return 0
    return value


def _title_key(recipe: Recipe) -> tuple[str, str]:
    title = recipe.title or ""
    return locale.strxfrm(title.casefold()), locale.strxfrm(title)


def filter_by_max_minutes(recipes: Iterable[Recipe], max_minutes: float) -> list[Recipe]:
    """Keep recipes within the bound. A non-finite bound falls back to the default."""
    if max_minutes is None or not math.isfinite(max_minutes):
        max_minutes = DEFAULT_MAX_MINUTES
    bound = clamp(max_minutes, MIN_MAX_MINUTES, MAX_MAX_MINUTES)
    return [r for r in recipes if prep_minutes(r) <= bound]


def sort_recipes(recipes: Iterable[Recipe], mode: SortMode | str) -> list[Recipe]:
    mode = SortMode(mode)
    if mode is SortMode.FASTEST:
        return sorted(recipes, key=prep_minutes)
    if mode is SortMode.AZ:
        return sorted(recipes, key=_title_key)
    # newest: the server already returns newest first
    return list(recipes)


def transform(
    recipes: Sequence[Recipe],
    max_minutes: float = DEFAULT_MAX_MINUTES,
    sort: SortMode | str = SortMode.NEWEST,
) -> list[Recipe]:
    return sort_recipes(filter_by_max_minutes(recipes, max_minutes), sort)


def list_categories(recipes: Iterable[Recipe]) -> list[str]:
    return sorted({r.category for r in recipes if r.category})


def favorite_recipes(recipes: Iterable[Recipe], favorite_ids: Iterable[str]) -> list[Recipe]:
    """Recipes marked as favorite. Ids without a matching recipe are ignored."""
    wanted = set(favorite_ids)
    return [r for r in recipes if r.id in wanted]


@dataclass
class ListFilters:
    max_minutes: float = DEFAULT_MAX_MINUTES
    sort: SortMode = SortMode.NEWEST

    @property
    def has_active_extra_filters(self) -> bool:
        return self.max_minutes != DEFAULT_MAX_MINUTES or self.sort != SortMode.NEWEST

    def reset(self) -> None:
        self.max_minutes = DEFAULT_MAX_MINUTES
        self.sort = SortMode.NEWEST

    def apply(self, recipes: Sequence[Recipe]) -> list[Recipe]:
        return transform(recipes, self.max_minutes, self.sort)
