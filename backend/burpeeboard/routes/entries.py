from __future__ import annotations
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from burpeeboard.db import get_session
from burpeeboard.auth_deps import get_current_user
from burpeeboard.contest import CONTEST_START, CONTEST_END
from burpeeboard.schemas.entry import EntryUpsert, EntryPublic
from burpeeboard.services.entries import (
    own_entries, upsert_entry, delete_entry, OutsideContestWindow, NegativeCount, CountTooLarge, EntryNotFound,
)

router = APIRouter(prefix="/entries", tags=["entries"])

@router.get("", response_model=list[EntryPublic])
async def list_own_entries(
    start_date: date = Query(default=CONTEST_START),
    end_date: date = Query(default=CONTEST_END),
    session: AsyncSession = Depends(get_session),
    user=Depends(get_current_user),
):
    rows = await own_entries(session, user.id, start_date, end_date)
    return [EntryPublic(entry_date=e.entry_date, burpees=e.burpees) for e in rows]

@router.put("", response_model=EntryPublic)
async def save_entry(payload: EntryUpsert, session: AsyncSession = Depends(get_session), user=Depends(get_current_user)):
    try:
        e = await upsert_entry(
            session, actor_id=user.id, target_id=user.id, entry_date=payload.entry_date, burpees=payload.burpees
        )
    except (OutsideContestWindow, NegativeCount, CountTooLarge) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return EntryPublic(entry_date=e.entry_date, burpees=e.burpees)

@router.delete("/{entry_date}", status_code=204)
async def remove_entry(entry_date: date, session: AsyncSession = Depends(get_session), user=Depends(get_current_user)):
    try:
        await delete_entry(session, actor_id=user.id, target_id=user.id, entry_date=entry_date)
    except EntryNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Response(status_code=204)
