from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.auth import require_api_key, require_session_token, require_user
from backend import repositories
from backend.schemas import ConfirmPayload, ProfilePatch, SessionResponse, SignInPayload, SignUpPayload
from backend.services import auth_service

router = APIRouter(prefix="/v1/auth")


@router.post("/signup", response_model=SessionResponse, dependencies=[Depends(require_api_key)])
async def sign_up(payload: SignUpPayload):
    return await auth_service.sign_up(payload.email, payload.password, payload.full_name)


@router.post("/signin", response_model=SessionResponse, dependencies=[Depends(require_api_key)])
async def sign_in(payload: SignInPayload):
    return await auth_service.sign_in(payload.email, payload.password)


@router.post("/confirm", response_model=SessionResponse, dependencies=[Depends(require_api_key)])
async def confirm(payload: ConfirmPayload):
    return await auth_service.confirm_email(payload.email, payload.token)


@router.post("/signout")
async def sign_out(token: str = Depends(require_session_token)):
    await auth_service.sign_out(token)
    return {"ok": True}


@router.get("/me")
async def me(user: dict = Depends(require_user)):
    return {"user": user}


@router.patch("/profile")
async def update_profile(payload: ProfilePatch, user: dict = Depends(require_user)):
    updated = await repositories.update_user_profile(user["id"], payload.full_name)
    return {"user": updated}


@router.delete("/account")
async def delete_account(user: dict = Depends(require_user)):
    await auth_service.delete_account(user["id"])
    return {"ok": True}
