# cookbook/client/deps.py (wires the client-side services from ClientSettings)

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from cookbook.client.api_client import RecipesApiClient
from cookbook.client.auth import AuthContext
from cookbook.client.config import ClientSettings, get_client_settings
from cookbook.client.directory import RecipeDirectory
from cookbook.client.editor import RecipeEditor
from cookbook.client.identity import IdentityProvider, SupabaseIdentityProvider
from cookbook.client.kitchen import RecipeView
from cookbook.client.persistence import LocalPersistenceStore
from cookbook.client.storage.base import KeyValueStore
from cookbook.client.storage.json_file import JsonFileKeyValueStore


@dataclass
class CookbookClient:
    api: RecipesApiClient
    persistence: LocalPersistenceStore
    auth: AuthContext
    directory: RecipeDirectory
    editor: RecipeEditor

    def recipe_view(self) -> RecipeView:
        return RecipeView(self.api, self.persistence)

    async def aclose(self) -> None:
        self.directory.close()
        self.auth.close()
        await self.api.aclose()


def build_client(
    settings: Optional[ClientSettings] = None,
    *,
    provider: Optional[IdentityProvider] = None,
    store: Optional[KeyValueStore] = None,
    api: Optional[RecipesApiClient] = None,
) -> CookbookClient:
    """
    Assemble the client services.

    Args:
        settings: defaults to get_client_settings()
        provider: defaults to Supabase auth built from settings
        store: defaults to the JSON state file from settings
        api: defaults to an HTTP client against settings.API_URL

    Returns:
        CookbookClient with the auth context already started
    """
    settings = settings or get_client_settings()
    provider = provider or SupabaseIdentityProvider.from_settings(settings)
    persistence = LocalPersistenceStore(store or JsonFileKeyValueStore(settings.STATE_FILE))
    api = api or RecipesApiClient(settings.API_URL)

    auth = AuthContext(provider)
    auth.start()

    return CookbookClient(
        api=api,
        persistence=persistence,
        auth=auth,
        directory=RecipeDirectory(api, settings.SEARCH_DEBOUNCE_SECONDS),
        editor=RecipeEditor(api, auth.get_token, persistence),
    )
