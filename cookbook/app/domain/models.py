# cookbook/app/domain/models.py
"""
Domain models for the cookbook.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class AuthenticatedUser:
    """Caller identity taken from a verified bearer token."""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None


@dataclass
class RecipeDraft:
    """
    Sanitized create/update payload.
    Ownership is never part of a draft; it is stamped from the caller on create.
    """
    title: str
    category: str
    prep_minutes: int = 0
    image_url: str = ""
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)


@dataclass
class Recipe:
    """
    A stored recipe.
    Legacy records carry an empty owner_id and are locked against mutation.
    """
    id: str
    title: str
    category: str
    prep_minutes: int = 0
    image_url: str = ""
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)

    # Ownership (empty on legacy records)
    owner_id: str = ""
    owner_name: str = ""
    owner_email: str = ""

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_legacy(self) -> bool:
        """Check if the recipe predates ownership."""
        return not self.owner_id


@dataclass
class RecipeQuery:
    """Server-side list filter. Empty strings mean no filter."""
    search: str = ""
    category: str = ""
