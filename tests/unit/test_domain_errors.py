from __future__ import annotations

from cookbook.app.domain.errors import (
    AuthError,
    AuthorizationError,
    RecipeError,
    RecipeNotFoundError,
    RecipeRepositoryError,
    RecipeValidationError,
)


class TestRecipeError:
    def test_base_exception(self) -> None:
        error = RecipeError("Base error")
        assert str(error) == "Base error"
        assert error.message == "Base error"
        assert error.status_code == 500
        assert isinstance(error, Exception)


class TestStatusCodes:
    def test_validation_error(self) -> None:
        error = RecipeValidationError()
        assert error.status_code == 400
        assert error.message == "title and category are required"

    def test_auth_error(self) -> None:
        error = AuthError("Invalid token")
        assert error.status_code == 401
        assert str(error) == "Invalid token"

    def test_authorization_error(self) -> None:
        assert AuthorizationError().status_code == 403

    def test_not_found_includes_recipe_id(self) -> None:
        error = RecipeNotFoundError("abc-123")
        assert error.status_code == 404
        assert error.message == "Recipe not found"
        assert error.recipe_id == "abc-123"

    def test_all_share_base(self) -> None:
        for error in (
            RecipeValidationError(),
            AuthError(),
            AuthorizationError(),
            RecipeNotFoundError("x"),
        ):
            assert isinstance(error, RecipeError)


class TestRecipeRepositoryError:
    def test_includes_operation_and_reason(self) -> None:
        error = RecipeRepositoryError("create", "connection reset")
        assert "create" in str(error)
        assert "connection reset" in str(error)
        assert error.operation == "create"
        assert error.reason == "connection reset"
        assert error.status_code == 500
