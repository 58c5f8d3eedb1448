from __future__ import annotations
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from burpeeboard.db import get_session
from burpeeboard.auth_deps import get_current_user, require_admin
from burpeeboard.models.user import User
from burpeeboard.schemas.entry import AdminEntrySet, EntryPublic
from burpeeboard.schemas.profile import ProfilePublic, ProfileUpdate
from burpeeboard.security import is_admin_email
from burpeeboard.services.entries import upsert_entry, OutsideContestWindow, NegativeCount, CountTooLarge
from burpeeboard.services.profiles import list_profiles, save_display_name

router = APIRouter(prefix="/admin", tags=["admin"])
log = structlog.get_logger()

@router.get("/is-admin")
async def is_admin(user=Depends(get_current_user)):
    return {"is_admin": is_admin_email(user.email)}

@router.get("/contestants", response_model=list[ProfilePublic])
async def contestants(session: AsyncSession = Depends(get_session), admin=Depends(require_admin)):
    rows = await list_profiles(session)
    return [ProfilePublic(user_id=p.user_id, display_name=p.display_name) for p in rows]

@router.put("/entries", response_model=EntryPublic)
async def admin_set_entry(payload: AdminEntrySet, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)):
    target = await session.get(User, payload.user_id)
    if not target:
        raise HTTPException(status_code=404, detail="User not found")
    admin_id, target_id = admin.id, target.id
    try:
        e = await upsert_entry(
            session, actor_id=admin_id, target_id=target_id, entry_date=payload.entry_date, burpees=payload.burpees
        )
    except (OutsideContestWindow, NegativeCount, CountTooLarge) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    log.info("admin_entry_set", admin_id=str(admin_id), target_id=str(target_id), entry_date=payload.entry_date.isoformat())
    return EntryPublic(entry_date=e.entry_date, burpees=e.burpees)

@router.put("/profiles/{user_id}", response_model=ProfilePublic)
async def admin_rename(
    user_id: UUID, payload: ProfileUpdate, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)
):
    if not await session.get(User, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    p = await save_display_name(session, user_id, payload.display_name)
    return ProfilePublic(user_id=p.user_id, display_name=p.display_name)
