from __future__ import annotations
from typing import Any
from pydantic import BaseModel
from datetime import date
from burpeeboard.schemas.audit import AuditRecordPublic
from burpeeboard.schemas.entry import EntryPublic
from burpeeboard.schemas.leaderboard import LeaderboardViewRow

class RulePublic(BaseModel):
    title: str
    body: str

class ContestPublic(BaseModel):
    name: str
    start_date: date
    end_date: date
    days: int
    daily_goal: int
    month_goal: int
    rules: list[RulePublic]

class Dashboard(BaseModel):
    today: date
    display_name: str
    entries: list[EntryPublic]
    my_total: int
    streak: int
    percent: int
    goal: int
    leaderboard: list[LeaderboardViewRow]
    audit: list[AuditRecordPublic]
    progress_chart: dict[str, Any]
    leaderboard_chart: dict[str, Any]
