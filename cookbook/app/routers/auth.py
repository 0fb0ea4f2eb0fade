from __future__ import annotations
from fastapi import APIRouter, Depends
from cookbook.app.deps import get_current_user
from cookbook.app.domain.models import AuthenticatedUser

router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("/me")
async def me(user: AuthenticatedUser = Depends(get_current_user)):
    return {"uid": user.uid, "email": user.email, "name": user.name}
