from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends

from backend.auth import require_user
from backend import repositories

router = APIRouter()


@router.get("/v1/bootstrap")
async def bootstrap(user: dict = Depends(require_user)):
    settings = await repositories.get_or_create_user_settings(user["id"])
    today = datetime.now(ZoneInfo(settings["timezone"])).date()
    return {
        "user": user,
        "settings": settings,
        "today": today.isoformat(),
    }
