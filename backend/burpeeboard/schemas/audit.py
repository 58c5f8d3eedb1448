from __future__ import annotations
from typing import Literal
from pydantic import BaseModel
from datetime import date, datetime

AuditAction = Literal["INSERT", "UPDATE", "DELETE"]

class AuditRecordPublic(BaseModel):
    occurred_at: datetime
    action: AuditAction
    actor_name: str
    target_name: str
    entry_date: date
    old_burpees: int | None = None
    new_burpees: int | None = None
    summary: str
