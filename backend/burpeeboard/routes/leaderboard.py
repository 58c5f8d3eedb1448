from __future__ import annotations
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from burpeeboard.db import get_session
from burpeeboard.auth_deps import get_current_user
from burpeeboard.contest import CONTEST_START, CONTEST_END
from burpeeboard.schemas.leaderboard import LeaderboardRow
from burpeeboard.services.leaderboard import leaderboard_totals

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

@router.get("", response_model=list[LeaderboardRow])
async def get_leaderboard(
    start_date: date = Query(default=CONTEST_START),
    end_date: date = Query(default=CONTEST_END),
    session: AsyncSession = Depends(get_session),
    user=Depends(get_current_user),
):
    return await leaderboard_totals(session, start_date, end_date)
