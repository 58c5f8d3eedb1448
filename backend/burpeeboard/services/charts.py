"""Chart datasets for the leaderboard bar chart and the goal doughnut.

Colors come from golden-angle hue spacing so adjacent ranks stay visually
apart however many contestants there are. Both charts share these helpers.
"""
from __future__ import annotations
from typing import Any, Iterable, Mapping
from burpeeboard.contest import CONTEST_NAME, MONTH_GOAL
from burpeeboard.services.progress import goal_progress, remaining

GOLDEN_ANGLE = 137.508

COMPLETED_COLOR, COMPLETED_BORDER = "#22c55e", "#16a34a"
REMAINING_COLOR, REMAINING_BORDER = "#ef4444", "#dc2626"


def hue_for_index(i: int) -> float:
    return (i * GOLDEN_ANGLE) % 360


def color_for_index(i: int) -> str:
    return f"hsl({hue_for_index(i):g} 70% 50%)"


def border_for_index(i: int) -> str:
    return f"hsl({hue_for_index(i):g} 70% 40%)"


def leaderboard_view(rows: Iterable[Mapping[str, Any]], goal: int = MONTH_GOAL) -> list[dict[str, Any]]:
    # Rows keep the order the aggregation returned them in.
    out = []
    for i, r in enumerate(rows):
        total = int(r.get("total_burpees") or 0)
        out.append({
            "rank": i + 1,
            "user_id": str(r["user_id"]),
            "display_name": r.get("display_name") or "",
            "total_burpees": total,
            "percent": goal_progress(total, goal),
            "color": color_for_index(i),
            "border_color": border_for_index(i),
        })
    return out


def bar_chart(rows: Iterable[Mapping[str, Any]], label: str | None = None) -> dict[str, Any]:
    rows = list(rows)
    return {
        "labels": [r.get("display_name") or "" for r in rows],
        "datasets": [
            {
                "label": label or f"Total Burpees ({CONTEST_NAME})",
                "data": [int(r.get("total_burpees") or 0) for r in rows],
                "backgroundColor": [color_for_index(i) for i in range(len(rows))],
                "borderColor": [border_for_index(i) for i in range(len(rows))],
                "borderWidth": 1,
            }
        ],
    }


def progress_doughnut(total: int, goal: int = MONTH_GOAL) -> dict[str, Any]:
    pct = goal_progress(total, goal)
    return {
        "labels": ["Completed", "Remaining"],
        "datasets": [
            {
                "label": f"My {goal} Goal Progress",
                "data": [max(0, total), remaining(total, goal)],
                "backgroundColor": [COMPLETED_COLOR, REMAINING_COLOR],
                "borderColor": [COMPLETED_BORDER, REMAINING_BORDER],
                "borderWidth": 1,
            }
        ],
        "options": {"cutout": "70%", "plugins": {"centerText": {"text": f"{pct}%"}}},
    }
