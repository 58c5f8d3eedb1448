from __future__ import annotations
from pydantic import BaseModel
from uuid import UUID

class LeaderboardRow(BaseModel):
    user_id: UUID
    display_name: str
    total_burpees: int

class LeaderboardViewRow(LeaderboardRow):
    rank: int
    percent: int
    color: str
    border_color: str
