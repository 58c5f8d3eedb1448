from __future__ import annotations
import math
from burpeeboard.contest import MONTH_GOAL


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def goal_progress(total: int | float | None, goal: int = MONTH_GOAL) -> int:
    """Display percentage in [0, 100]. The total itself is never capped."""
    if not total or total < 0 or goal <= 0:
        return 0
    return min(100, _round_half_up(total / goal * 100))


def remaining(total: int | None, goal: int = MONTH_GOAL) -> int:
    return max(0, goal - max(0, total or 0))
