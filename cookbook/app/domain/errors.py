from __future__ import annotations


class RecipeError(Exception):
    status_code: int = 500

    def __init__(self, message: str = "Unexpected error"):
        super().__init__(message)
        self.message = message


class RecipeValidationError(RecipeError):
    status_code = 400

    def __init__(self, message: str = "title and category are required"):
        super().__init__(message)


class AuthError(RecipeError):
    status_code = 401

    def __init__(self, message: str = "Missing token"):
        super().__init__(message)


class AuthorizationError(RecipeError):
    status_code = 403

    def __init__(self, message: str = "You can only modify your own recipes"):
        super().__init__(message)


class RecipeNotFoundError(RecipeError):
    status_code = 404

    def __init__(self, recipe_id: str):
        super().__init__("Recipe not found")
        self.recipe_id = recipe_id


class RecipeRepositoryError(RecipeError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Recipe repository error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
