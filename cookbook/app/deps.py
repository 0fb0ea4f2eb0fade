# cookbook/app/deps.py (singletons for the store client, exposed as dependencies)

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client, create_client

from cookbook.app.config import settings
from cookbook.app.domain.errors import AuthError
from cookbook.app.domain.models import AuthenticatedUser
from cookbook.app.infra.auth.base import TokenVerifier
from cookbook.app.infra.auth.supabase_verifier import SupabaseTokenVerifier
from cookbook.app.infra.db.base import RecipeRepository
from cookbook.app.infra.db.memory_recipes_repo import InMemoryRecipeRepository
from cookbook.app.infra.db.supabase_recipes_repo import SupabaseRecipeRepository
from cookbook.app.services.recipe_service import RecipeService

_client: Client | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY required")
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


@lru_cache(maxsize=1)
def get_recipe_repository() -> RecipeRepository:
    if settings.RECIPE_STORE == "memory":
        return InMemoryRecipeRepository()
    return SupabaseRecipeRepository(get_supabase(), settings.RECIPES_TABLE)


def get_recipe_service(
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeService:
    return RecipeService(repo)


def get_token_verifier() -> TokenVerifier:
    return SupabaseTokenVerifier(get_supabase())


auth_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedUser:
    """
    Reads Authorization: Bearer <token> and verifies it against the identity
    provider on every request.
    """
    if cred is None or cred.scheme.lower() != "bearer" or not cred.credentials:
        raise AuthError("Missing token")
    return verifier.verify(cred.credentials)
