from __future__ import annotations
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from burpeeboard.db import get_session
from burpeeboard.auth_deps import get_current_user
from burpeeboard.contest import (
    CONTEST_NAME, CONTEST_START, CONTEST_END, CONTEST_DAYS, DAILY_GOAL, MONTH_GOAL, RULES,
)
from burpeeboard.schemas.dashboard import ContestPublic, Dashboard
from burpeeboard.services.audit import recent_changes
from burpeeboard.services.charts import bar_chart, leaderboard_view, progress_doughnut
from burpeeboard.services.entries import own_entries
from burpeeboard.services.leaderboard import leaderboard_totals
from burpeeboard.services.profiles import ensure_profile
from burpeeboard.services.progress import goal_progress
from burpeeboard.services.streak import calc_streak, total_burpees

router = APIRouter(tags=["dashboard"])

def _local_today(tz_name: str | None) -> date:
    if not tz_name:
        return date.today()
    try:
        return datetime.now(ZoneInfo(tz_name)).date()
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {tz_name}")

@router.get("/contest", response_model=ContestPublic)
async def contest():
    return ContestPublic(
        name=CONTEST_NAME,
        start_date=CONTEST_START,
        end_date=CONTEST_END,
        days=CONTEST_DAYS,
        daily_goal=DAILY_GOAL,
        month_goal=MONTH_GOAL,
        rules=RULES,
    )

@router.get("/dashboard", response_model=Dashboard)
async def dashboard(
    today: date | None = Query(default=None, description="client's local date; overrides the timezone header"),
    x_client_tz: str | None = Header(default=None, alias="X-Client-Timezone"),
    session: AsyncSession = Depends(get_session),
    user=Depends(get_current_user),
):
    today = today or _local_today(x_client_tz)
    profile = await ensure_profile(session, user.id)
    await session.commit()

    rows = await own_entries(session, user.id)
    by_date = {e.entry_date: e.burpees for e in rows}
    my_total = total_burpees(by_date)
    board = await leaderboard_totals(session)

    return Dashboard(
        today=today,
        display_name=profile.display_name,
        entries=[{"entry_date": e.entry_date, "burpees": e.burpees} for e in rows],
        my_total=my_total,
        streak=calc_streak(by_date, today),
        percent=goal_progress(my_total),
        goal=MONTH_GOAL,
        leaderboard=leaderboard_view(board),
        audit=await recent_changes(session),
        progress_chart=progress_doughnut(my_total),
        leaderboard_chart=bar_chart(board),
    )
