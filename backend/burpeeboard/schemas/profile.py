from __future__ import annotations
from pydantic import BaseModel, Field
from uuid import UUID

class ProfileUpdate(BaseModel):
    display_name: str | None = Field(default=None, max_length=80)

class ProfilePublic(BaseModel):
    user_id: UUID
    display_name: str
