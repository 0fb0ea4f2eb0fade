from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class RecipePayload(BaseModel):
    # Checked by build_draft; missing or blank fields answer 400 with a message.
    title: Any = None
    category: Any = None
    prepMinutes: Any = 0
    imageUrl: Any = None
    ingredients: Any = None
    instructions: Any = None


class RecipeResponse(BaseModel):
    id: str
    title: str
    category: str
    prepMinutes: int = 0
    imageUrl: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    ownerId: str = ""
    ownerName: str = ""
    ownerEmail: str = ""
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class OkResponse(BaseModel):
    ok: bool = True


class MessageResponse(BaseModel):
    message: str
