from __future__ import annotations
from pydantic import BaseModel, EmailStr
from uuid import UUID
from datetime import datetime

class OtpRequest(BaseModel):
    email: EmailStr

class OtpSent(BaseModel):
    sent: bool = True
    # only populated when ENVIRONMENT=dev, stands in for the email
    token: str | None = None

class VerifyRequest(BaseModel):
    token: str

class UserPublic(BaseModel):
    id: UUID
    email: EmailStr
    created_at: datetime
    is_admin: bool = False

class TokenPair(BaseModel):
    access: str
    refresh: str

class SessionPublic(TokenPair):
    user: UserPublic
