from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from backend.auth import require_user
from backend import repositories
from backend.schemas import EventCreate, EventPatch

router = APIRouter()


def _check_range(start: datetime, end: datetime) -> None:
    if end < start:
        raise HTTPException(status_code=400, detail="End date must be after start date")


@router.get("/v1/events")
async def list_events(
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    user: dict = Depends(require_user),
):
    if start is not None and end is not None:
        _check_range(start, end)
        items = await repositories.list_events_overlapping(user["id"], start, end)
    else:
        items = await repositories.list_events(user["id"])
    return {"items": items}


@router.get("/v1/events/day")
async def list_events_for_day(
    start: datetime = Query(...),
    end: datetime = Query(...),
    user: dict = Depends(require_user),
):
    _check_range(start, end)
    items = await repositories.list_events_touching_day(user["id"], start, end)
    return {"items": items}


@router.post("/v1/events", status_code=201)
async def create_event(payload: EventCreate, user: dict = Depends(require_user)):
    return await repositories.create_event(user["id"], payload.model_dump())


@router.get("/v1/events/{event_id}")
async def get_event(event_id: str, user: dict = Depends(require_user)):
    return await repositories.get_event(user["id"], event_id)


@router.patch("/v1/events/{event_id}")
async def update_event(event_id: str, payload: EventPatch, user: dict = Depends(require_user)):
    current = await repositories.get_event(user["id"], event_id)
    merged = {key: current[key] for key in EventCreate.model_fields}
    merged.update(payload.model_dump(exclude_unset=True, exclude_none=True))
    try:
        validated = EventCreate(**merged)
    except ValidationError as exc:
        errors = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()]
        raise HTTPException(status_code=422, detail=errors)
    return await repositories.replace_event(user["id"], event_id, validated.model_dump())


@router.delete("/v1/events/{event_id}")
async def delete_event(event_id: str, user: dict = Depends(require_user)):
    await repositories.delete_event(user["id"], event_id)
    return {"ok": True}
