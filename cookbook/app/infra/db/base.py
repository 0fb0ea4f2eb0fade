# cookbook/app/infra/db/base.py
"""
Abstract base class for the recipe document store.
This interface allows easy swapping between different store backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from cookbook.app.domain.models import AuthenticatedUser, Recipe, RecipeDraft, RecipeQuery


class RecipeRepository(ABC):
    """
    Abstract interface for recipe persistence.

    Implementations:
    - SupabaseRecipeRepository: Postgres table through Supabase
    - InMemoryRecipeRepository: process-local store for development and tests
    """

    @abstractmethod
    def list_recipes(self, query: RecipeQuery) -> list[Recipe]:
        """
        List recipes matching the query, newest first.

        Args:
            query: search is a case-insensitive substring over title or
                category; category is an exact match

        Returns:
            List of recipes
        """
        pass

    @abstractmethod
    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """
        Get a recipe by its ID.

        Returns:
            The recipe, or None if not found
        """
        pass

    @abstractmethod
    def create_recipe(self, draft: RecipeDraft, owner: AuthenticatedUser) -> Recipe:
        """
        Insert a new recipe stamped with its owner.

        Args:
            draft: Sanitized recipe fields
            owner: Verified caller that becomes the owner

        Returns:
            The created recipe with its server-assigned ID
        """
        pass

    @abstractmethod
    def update_recipe(self, recipe_id: str, draft: RecipeDraft) -> Optional[Recipe]:
        """
        Replace the editable fields of a recipe. Ownership is untouched.

        Returns:
            The updated recipe, or None if it no longer exists
        """
        pass

    @abstractmethod
    def delete_recipe(self, recipe_id: str) -> bool:
        """
        Delete a recipe.

        Returns:
            True if a record was removed
        """
        pass
