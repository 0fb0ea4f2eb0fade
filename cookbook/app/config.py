from __future__ import annotations

from typing import Literal, Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    SUPABASE_URL: Optional[AnyUrl] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    RECIPE_STORE: Literal["supabase", "memory"] = "supabase"
    RECIPES_TABLE: str = "recipes"
    CLIENT_URL: Optional[str] = None
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
    )
    CORS_ORIGIN_REGEX: Optional[str] = r"https://.*\.vercel\.app"

    @property
    def cors_origins(self) -> list[str]:
        origins = list(self.FRONTEND_CORS_ORIGINS)
        if self.CLIENT_URL and self.CLIENT_URL not in origins:
            origins.append(self.CLIENT_URL)
        return origins


settings = Settings()
