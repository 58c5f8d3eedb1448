"""Fixed contest constants shared by the API and the client views."""
from __future__ import annotations
from datetime import date
from burpeeboard.config import settings

CONTEST_NAME: str = settings.contest_name
CONTEST_START: date = date.fromisoformat(settings.contest_start)
CONTEST_END: date = date.fromisoformat(settings.contest_end)
CONTEST_DAYS: int = (CONTEST_END - CONTEST_START).days + 1
DAILY_GOAL: int = settings.daily_goal
MONTH_GOAL: int = DAILY_GOAL * CONTEST_DAYS

AUDIT_FEED_LIMIT = 50
DEFAULT_DISPLAY_NAME = "Anonymous"
MAX_COUNT = 2**31 - 1  # int4 column ceiling

RULES: list[dict[str, str]] = [
    {
        "title": "Rule #1. Definition of a burpee",
        "body": (
            "Stand with feet shoulder-width apart. Squat and place your hands on the floor, "
            "kick or step back into a high plank and lower your chest for a push-up, "
            "return to the squat, then stand and jump with arms overhead. Move directly into the next rep."
        ),
    },
    {
        "title": "Rule #2. Daily goal",
        "body": (
            f"The goal is to average {DAILY_GOAL} burpees per day for the contest. Burpees may be done "
            "at one time or throughout the day, on the honor system. You may do more or less on any day."
        ),
    },
    {
        "title": "Rule #3. Contest window",
        "body": f"The contest starts on {CONTEST_START:%B} {CONTEST_START.day} at 00:01 and ends on {CONTEST_END:%B} {CONTEST_END.day} at 23:59.",
    },
    {
        "title": "Rule #4. Video submissions",
        "body": (
            "Solo sessions need a time-lapse video posted to the group thread for every set. "
            "Sessions done with other contestants need no video."
        ),
    },
    {
        "title": "Rule #5. Buy-in and payout",
        "body": (
            f"The buy-in is $50. Finishing all {MONTH_GOAL} burpees by the end of the window earns it back; "
            "unfinished buy-ins go to a not-for-profit organization chosen by the founder."
        ),
    },
    {
        "title": "Rule #6. Injury policy",
        "body": "An injured contestant is refunded $25 and the remaining $25 is donated.",
    },
]


def in_window(d: date, start: date = CONTEST_START, end: date = CONTEST_END) -> bool:
    return start <= d <= end


def window_label(start: date = CONTEST_START, end: date = CONTEST_END) -> str:
    if (start.year, start.month) == (end.year, end.month):
        return f"{start:%B} {start.day}-{end.day}, {start.year}"
    return f"{start.isoformat()} to {end.isoformat()}"
