from __future__ import annotations
from datetime import date
from typing import Any
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from burpeeboard.contest import CONTEST_START, CONTEST_END, DEFAULT_DISPLAY_NAME
from burpeeboard.models.entry import BurpeeEntry
from burpeeboard.models.profile import Profile


async def leaderboard_totals(
    session: AsyncSession, start: date = CONTEST_START, end: date = CONTEST_END
) -> list[dict[str, Any]]:
    """Per-user totals inside [start, end] for every user with at least one entry, biggest first."""
    total = func.sum(BurpeeEntry.burpees).label("total_burpees")
    name = func.coalesce(Profile.display_name, DEFAULT_DISPLAY_NAME).label("display_name")
    rows = (await session.execute(
        select(BurpeeEntry.user_id, name, total)
        .outerjoin(Profile, Profile.user_id == BurpeeEntry.user_id)
        .where(BurpeeEntry.entry_date >= start, BurpeeEntry.entry_date <= end)
        .group_by(BurpeeEntry.user_id, Profile.display_name)
        .order_by(total.desc(), name.asc())
    )).all()
    return [
        {"user_id": uid, "display_name": dname, "total_burpees": int(t or 0)}
        for (uid, dname, t) in rows
    ]
