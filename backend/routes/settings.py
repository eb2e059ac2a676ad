from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.auth import require_user
from backend import repositories
from backend.schemas import SettingsPatch

router = APIRouter()


@router.get("/v1/settings")
async def get_settings(user: dict = Depends(require_user)):
    return await repositories.get_or_create_user_settings(user["id"])


@router.patch("/v1/settings")
async def update_settings(payload: SettingsPatch, user: dict = Depends(require_user)):
    return await repositories.update_user_settings(user["id"], payload.model_dump(exclude_unset=True, exclude_none=True))
