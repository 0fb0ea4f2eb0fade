# cookbook/app/routers/recipes.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from cookbook.app.deps import get_current_user, get_recipe_service
from cookbook.app.domain.models import AuthenticatedUser, Recipe
from cookbook.app.schemas.recipes import (
    MessageResponse,
    OkResponse,
    RecipePayload,
    RecipeResponse,
)
from cookbook.app.services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])

_ERROR_RESPONSES = {
    400: {"model": MessageResponse},
    401: {"model": MessageResponse},
    403: {"model": MessageResponse},
    404: {"model": MessageResponse},
}


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _payload_dict(payload: Optional[RecipePayload]) -> dict:
    # An absent body validates like an empty one.
    return payload.model_dump() if payload else {}


def _recipe_to_response(recipe: Recipe) -> RecipeResponse:
    return RecipeResponse(
        id=str(recipe.id),
        title=recipe.title,
        category=recipe.category,
        prepMinutes=recipe.prep_minutes,
        imageUrl=recipe.image_url,
        ingredients=recipe.ingredients,
        instructions=recipe.instructions,
        ownerId=recipe.owner_id,
        ownerName=recipe.owner_name,
        ownerEmail=recipe.owner_email,
        createdAt=_format_timestamp(recipe.created_at),
        updatedAt=_format_timestamp(recipe.updated_at),
    )


@router.get("", response_model=list[RecipeResponse])
def list_recipes(
    search: str = Query(default=""),
    category: str = Query(default=""),
    service: RecipeService = Depends(get_recipe_service),
) -> list[RecipeResponse]:
    return [_recipe_to_response(r) for r in service.list_recipes(search, category)]


@router.get("/{recipe_id}", response_model=RecipeResponse, responses=_ERROR_RESPONSES)
def get_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    return _recipe_to_response(service.get_recipe(recipe_id))


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def create_recipe(
    payload: Optional[RecipePayload] = Body(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    recipe = service.create_recipe(_payload_dict(payload), user)
    return _recipe_to_response(recipe)


@router.put("/{recipe_id}", response_model=RecipeResponse, responses=_ERROR_RESPONSES)
def update_recipe(
    recipe_id: str,
    payload: Optional[RecipePayload] = Body(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    recipe = service.update_recipe(recipe_id, _payload_dict(payload), user)
    return _recipe_to_response(recipe)


@router.delete("/{recipe_id}", response_model=OkResponse, responses=_ERROR_RESPONSES)
def delete_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> OkResponse:
    service.delete_recipe(recipe_id, user)
    return OkResponse(ok=True)
