from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COOKBOOK_",
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    API_URL: str = "http://localhost:4000"
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SEARCH_DEBOUNCE_SECONDS: float = 0.35
    STATE_FILE: Path = Path.home() / ".cookbook" / "local_state.json"


def get_client_settings() -> ClientSettings:
    # Nearest .env walking up from the working directory.
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(dotenv_path=env_path, override=False)
    return ClientSettings()
