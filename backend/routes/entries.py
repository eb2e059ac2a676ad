from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from backend.auth import require_user
from backend import repositories
from backend.schemas import EntryCreate, EntryPatch

router = APIRouter()


@router.get("/v1/entries")
async def list_entries(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    user: dict = Depends(require_user),
):
    items = await repositories.list_entries(user["id"], limit)
    return {"items": items}


@router.post("/v1/entries", status_code=201)
async def create_entry(payload: EntryCreate, user: dict = Depends(require_user)):
    return await repositories.create_entry(user["id"], payload.model_dump())


@router.get("/v1/entries/{entry_id}")
async def get_entry(entry_id: str, user: dict = Depends(require_user)):
    return await repositories.get_entry(user["id"], entry_id)


@router.patch("/v1/entries/{entry_id}")
async def update_entry(entry_id: str, payload: EntryPatch, user: dict = Depends(require_user)):
    return await repositories.update_entry(user["id"], entry_id, payload.model_dump(exclude_unset=True, exclude_none=True))


@router.delete("/v1/entries/{entry_id}")
async def delete_entry(entry_id: str, user: dict = Depends(require_user)):
    await repositories.delete_entry(user["id"], entry_id)
    return {"ok": True}
