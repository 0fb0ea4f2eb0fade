# cookbook/client/models.py
"""
Client-side data structures: recipes as the API returns them and the
locally persisted kitchen progress.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    category: str = ""
    prepMinutes: Optional[float] = 0
    imageUrl: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    ownerId: Optional[str] = None
    ownerName: Optional[str] = None
    ownerEmail: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class RecipePayload(BaseModel):
    """Body sent on create/update."""
    title: str
    category: str
    prepMinutes: int = 0
    imageUrl: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


def _resize(flags: list[bool], length: int) -> list[bool]:
    return [bool(flags[i]) if i < len(flags) else False for i in range(length)]


@dataclass
class KitchenProgress:
    """Checklist state of one recipe in kitchen mode."""
    ingredients_done: list[bool] = field(default_factory=list)
    steps_done: list[bool] = field(default_factory=list)

    @classmethod
    def empty(cls, ingredient_count: int, step_count: int) -> "KitchenProgress":
        return cls([False] * ingredient_count, [False] * step_count)

    def resized(self, ingredient_count: int, step_count: int) -> "KitchenProgress":
        """
        Fit the checklists to the recipe's current item counts.
        Entries for removed items are dropped; new items start unchecked.
        """
        return KitchenProgress(
            ingredients_done=_resize(self.ingredients_done, ingredient_count),
            steps_done=_resize(self.steps_done, step_count),
        )

    @property
    def done_count(self) -> int:
        return sum(self.ingredients_done) + sum(self.steps_done)

    @property
    def total_count(self) -> int:
        return len(self.ingredients_done) + len(self.steps_done)

    def to_dict(self) -> dict[str, list[bool]]:
        return {
            "ingredientsDone": list(self.ingredients_done),
            "stepsDone": list(self.steps_done),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["KitchenProgress"]:
        """Parse a stored record. Returns None for anything malformed."""
        if not isinstance(data, dict):
            return None
        ingredients = data.get("ingredientsDone", [])
        steps = data.get("stepsDone", [])
        if not isinstance(ingredients, list) or not isinstance(steps, list):
            return None
        return cls(
            ingredients_done=[bool(x) for x in ingredients],
            steps_done=[bool(x) for x in steps],
        )
