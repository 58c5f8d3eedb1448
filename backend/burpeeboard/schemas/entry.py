from __future__ import annotations
from typing import Any
from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from datetime import date
from burpeeboard.services.entries import clamp_count

class EntryUpsert(BaseModel):
    entry_date: date
    burpees: int = 0

    @field_validator("burpees", mode="before")
    @classmethod
    def clamp(cls, v: Any) -> int:
        # non-numeric or negative input silently becomes 0
        return clamp_count(v)

class EntryPublic(BaseModel):
    entry_date: date
    burpees: int

class AdminEntrySet(BaseModel):
    user_id: UUID
    entry_date: date
    burpees: int = Field(ge=0)
