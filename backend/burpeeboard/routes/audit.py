from __future__ import annotations
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from burpeeboard.db import get_session
from burpeeboard.auth_deps import get_current_user
from burpeeboard.contest import AUDIT_FEED_LIMIT
from burpeeboard.schemas.audit import AuditRecordPublic
from burpeeboard.services.audit import recent_changes

router = APIRouter(prefix="/audit", tags=["audit"])

@router.get("", response_model=list[AuditRecordPublic])
async def audit_feed(
    limit: int = Query(default=AUDIT_FEED_LIMIT, ge=1, le=AUDIT_FEED_LIMIT),
    session: AsyncSession = Depends(get_session),
    user=Depends(get_current_user),
):
    return await recent_changes(session, limit)
