from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from burpeeboard.db import get_session
from burpeeboard.auth_deps import get_current_user
from burpeeboard.schemas.profile import ProfileUpdate, ProfilePublic
from burpeeboard.services.profiles import ensure_profile, save_display_name

router = APIRouter(prefix="/profile", tags=["profile"])

@router.get("", response_model=ProfilePublic)
async def get_profile(session: AsyncSession = Depends(get_session), user=Depends(get_current_user)):
    p = await ensure_profile(session, user.id)
    await session.commit()
    return ProfilePublic(user_id=p.user_id, display_name=p.display_name)

@router.put("", response_model=ProfilePublic)
async def put_profile(payload: ProfileUpdate, session: AsyncSession = Depends(get_session), user=Depends(get_current_user)):
    p = await save_display_name(session, user.id, payload.display_name)
    return ProfilePublic(user_id=p.user_id, display_name=p.display_name)
