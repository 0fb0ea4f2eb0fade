from __future__ import annotations

from cookbook.app.domain.models import AuthenticatedUser, Recipe, RecipeDraft, RecipeQuery


class TestRecipe:
    def test_defaults(self) -> None:
        recipe = Recipe(id="r1", title="Soup", category="Soups")

        assert recipe.prep_minutes == 0
        assert recipe.image_url == ""
        assert recipe.ingredients == []
        assert recipe.instructions == []
        assert recipe.created_at is None

    def test_without_owner_is_legacy(self) -> None:
        assert Recipe(id="r1", title="Soup", category="Soups").is_legacy is True

    def test_with_owner_is_not_legacy(self) -> None:
        recipe = Recipe(id="r1", title="Soup", category="Soups", owner_id="u1")
        assert recipe.is_legacy is False


class TestRecipeDraft:
    def test_lists_are_independent(self) -> None:
        first = RecipeDraft(title="A", category="B")
        second = RecipeDraft(title="C", category="D")
        first.ingredients.append("salt")

        assert second.ingredients == []


class TestAuthenticatedUser:
    def test_optional_fields(self) -> None:
        user = AuthenticatedUser(uid="u1")
        assert user.email is None
        assert user.name is None


class TestRecipeQuery:
    def test_empty_by_default(self) -> None:
        query = RecipeQuery()
        assert query.search == ""
        assert query.category == ""
