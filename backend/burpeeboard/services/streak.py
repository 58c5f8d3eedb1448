from __future__ import annotations
from datetime import date, timedelta
from typing import Any, Iterable, Mapping
from burpeeboard.contest import CONTEST_START, CONTEST_END


def entries_by_date(rows: Iterable[Mapping[str, Any]]) -> dict[date, int]:
    """Build a date -> count mapping from `{entry_date, burpees}` rows."""
    out: dict[date, int] = {}
    for r in rows:
        d = r["entry_date"]
        if isinstance(d, str):
            d = date.fromisoformat(d)
        out[d] = int(r.get("burpees") or 0)
    return out


def calc_streak(
    entries: Mapping[date, int],
    today: date,
    start: date = CONTEST_START,
    end: date = CONTEST_END,
) -> int:
    """
    Consecutive days with a positive count, walking backward from `today`
    clamped into [start, end]. A missing day counts as zero and stops the walk.
    """
    cursor = min(today, end)
    if cursor < start:
        cursor = start

    streak = 0
    while start <= cursor <= end:
        if (entries.get(cursor) or 0) > 0:
            streak += 1
        else:
            break
        cursor -= timedelta(days=1)
    return streak


def total_burpees(entries: Mapping[date, int]) -> int:
    return sum(int(v or 0) for v in entries.values())
