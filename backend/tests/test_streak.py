from __future__ import annotations
from datetime import date, timedelta
import pytest
from burpeeboard.services.streak import calc_streak, entries_by_date, total_burpees

START, END = date(2026, 3, 1), date(2026, 3, 31)


def _days(first: date, n: int, count: int = 100) -> dict[date, int]:
    return {first + timedelta(days=i): count for i in range(n)}


def test_today_missing_breaks_streak():
    # nothing logged today means no streak, even with earlier entries
    entries = {date(2026, 3, 1): 50, date(2026, 3, 2): 0}
    assert calc_streak(entries, date(2026, 3, 3)) == 0


def test_five_positive_days():
    entries = _days(date(2026, 3, 1), 5)
    assert calc_streak(entries, date(2026, 3, 5)) == 5


def test_zero_in_the_middle_truncates():
    entries = _days(date(2026, 3, 1), 10)
    entries[date(2026, 3, 7)] = 0
    assert calc_streak(entries, date(2026, 3, 10)) == 3


def test_gap_is_not_skipped():
    entries = _days(date(2026, 3, 1), 10)
    del entries[date(2026, 3, 8)]
    assert calc_streak(entries, date(2026, 3, 10)) == 2


def test_today_before_window_evaluates_start():
    assert calc_streak({START: 10}, date(2026, 2, 14)) == 1
    assert calc_streak({}, date(2026, 2, 14)) == 0


def test_today_after_window_evaluates_end():
    entries = _days(date(2026, 3, 29), 3)
    assert calc_streak(entries, date(2026, 6, 1)) == 3


def test_walk_stops_at_window_start():
    entries = _days(START - timedelta(days=5), 36)  # covers days before the window too
    assert calc_streak(entries, END) == 31


def test_custom_window():
    entries = _days(date(2026, 4, 1), 4)
    assert calc_streak(entries, date(2026, 4, 4), start=date(2026, 4, 2), end=date(2026, 4, 30)) == 3


@pytest.mark.parametrize("zero_at", [None, 1, 5, 12, 20])
def test_streak_is_positive_suffix_length(zero_at):
    today = date(2026, 3, 20)
    entries = _days(START, 20)
    if zero_at is not None:
        entries[START + timedelta(days=zero_at - 1)] = 0
    expected = 20 if zero_at is None else 20 - zero_at
    assert calc_streak(entries, today) == expected


def test_entries_by_date_accepts_strings_and_nulls():
    rows = [
        {"entry_date": "2026-03-01", "burpees": 12},
        {"entry_date": date(2026, 3, 2), "burpees": None},
    ]
    assert entries_by_date(rows) == {date(2026, 3, 1): 12, date(2026, 3, 2): 0}
    assert total_burpees(entries_by_date(rows)) == 12
