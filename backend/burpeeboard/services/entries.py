from __future__ import annotations
import math
from datetime import date
from typing import Any
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from burpeeboard.contest import CONTEST_START, CONTEST_END, MAX_COUNT, in_window, window_label
from burpeeboard.models.entry import BurpeeEntry
from burpeeboard.services.audit import record_change

log = structlog.get_logger()


class OutsideContestWindow(Exception):
    pass

class NegativeCount(Exception):
    pass

class CountTooLarge(Exception):
    pass

class EntryNotFound(Exception):
    pass


def clamp_count(raw: Any) -> int:
    """max(0, numeric value or 0). Never raises."""
    if raw is None or raw == "":
        return 0
    if isinstance(raw, int):
        return max(0, raw)
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return 0
    if math.isnan(value) or math.isinf(value):
        return 0
    return max(0, int(value))


def check_window(d: date) -> None:
    if not in_window(d):
        raise OutsideContestWindow(f"Date must be within {window_label()}.")


async def own_entries(
    session: AsyncSession, user_id: UUID, start: date = CONTEST_START, end: date = CONTEST_END
) -> list[BurpeeEntry]:
    return (await session.execute(
        select(BurpeeEntry)
        .where(BurpeeEntry.user_id == user_id, BurpeeEntry.entry_date >= start, BurpeeEntry.entry_date <= end)
        .order_by(BurpeeEntry.entry_date.asc())
    )).scalars().all()


async def _apply(session: AsyncSession, actor_id: UUID | None, target_id: UUID, entry_date: date, burpees: int) -> BurpeeEntry:
    entry = await session.scalar(
        select(BurpeeEntry).where(BurpeeEntry.user_id == target_id, BurpeeEntry.entry_date == entry_date)
    )
    if entry:
        old = entry.burpees
        entry.burpees = burpees
        action = "UPDATE"
    else:
        old = None
        entry = BurpeeEntry(user_id=target_id, entry_date=entry_date, burpees=burpees)
        session.add(entry)
        action = "INSERT"
    await session.flush()
    await record_change(
        session, action=action, actor_id=actor_id, target_id=target_id,
        entry_date=entry_date, old_burpees=old, new_burpees=burpees,
    )
    return entry


async def upsert_entry(
    session: AsyncSession, *, actor_id: UUID | None, target_id: UUID, entry_date: date, burpees: int
) -> BurpeeEntry:
    """
    Set the count for (target_id, entry_date), replacing any prior value.
    Commits. A concurrent insert of the same key is retried once as an update.
    """
    check_window(entry_date)
    if burpees < 0:
        raise NegativeCount("Burpees must be zero or more.")
    if burpees > MAX_COUNT:
        raise CountTooLarge(f"Burpees must be at most {MAX_COUNT}.")

    for attempt in range(2):
        try:
            entry = await _apply(session, actor_id, target_id, entry_date, burpees)
            await session.commit()
            break
        except IntegrityError:
            await session.rollback()
            if attempt:
                raise
    log.info("entry_upserted", actor_id=str(actor_id), target_id=str(target_id),
             entry_date=entry_date.isoformat(), burpees=burpees)
    return entry


async def delete_entry(session: AsyncSession, *, actor_id: UUID | None, target_id: UUID, entry_date: date) -> None:
    entry = await session.scalar(
        select(BurpeeEntry).where(BurpeeEntry.user_id == target_id, BurpeeEntry.entry_date == entry_date)
    )
    if not entry:
        raise EntryNotFound("No entry for that date")
    await record_change(
        session, action="DELETE", actor_id=actor_id, target_id=target_id,
        entry_date=entry_date, old_burpees=entry.burpees, new_burpees=None,
    )
    await session.delete(entry)
    await session.commit()
    log.info("entry_deleted", actor_id=str(actor_id), target_id=str(target_id), entry_date=entry_date.isoformat())
