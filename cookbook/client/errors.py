from __future__ import annotations


class ClientError(Exception):
    pass


class StorageError(ClientError):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Local storage failure for {key}: {reason}")
        self.key = key
        self.reason = reason


class ApiError(ClientError):
    def __init__(self, status_code: int, message: str = "Request failed"):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ApiValidationError(ApiError):
    def __init__(self, message: str = "title and category are required"):
        super().__init__(400, message)


class SessionExpiredError(ApiError):
    def __init__(self, message: str = "Invalid/expired token"):
        super().__init__(401, message)


class NotOwnerError(ApiError):
    def __init__(self, message: str = "You can only modify your own recipes"):
        super().__init__(403, message)


class RecipeNotFound(ApiError):
    def __init__(self, recipe_id: str):
        super().__init__(404, "Recipe not found")
        self.recipe_id = recipe_id
