from __future__ import annotations
from datetime import date
from typing import Any, Mapping
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession

from burpeeboard.contest import AUDIT_FEED_LIMIT, DEFAULT_DISPLAY_NAME
from burpeeboard.models.audit import BurpeeAudit
from burpeeboard.models.profile import Profile

ACTION_VERBS = {"INSERT": "created", "UPDATE": "updated", "DELETE": "deleted"}
PLACEHOLDER = "-"


def format_count(value: int | None) -> str:
    return PLACEHOLDER if value is None else str(value)


def describe(rec: Mapping[str, Any]) -> str:
    verb = ACTION_VERBS.get(rec["action"], str(rec["action"]).lower())
    return (
        f"{rec['actor_name']} {verb} {rec['target_name']}'s entry for {rec['entry_date']}: "
        f"{format_count(rec.get('old_burpees'))} -> {format_count(rec.get('new_burpees'))}"
    )


async def record_change(
    session: AsyncSession,
    *,
    action: str,
    actor_id: UUID | None,
    target_id: UUID,
    entry_date: date,
    old_burpees: int | None,
    new_burpees: int | None,
) -> None:
    session.add(BurpeeAudit(
        action=action,
        actor_id=actor_id,
        target_id=target_id,
        entry_date=entry_date,
        old_burpees=old_burpees,
        new_burpees=new_burpees,
    ))


async def recent_changes(session: AsyncSession, limit: int = AUDIT_FEED_LIMIT) -> list[dict[str, Any]]:
    """Newest-first slice of the change log with names resolved from profiles."""
    limit = max(1, min(int(limit), AUDIT_FEED_LIMIT))
    actor = aliased(Profile)
    target = aliased(Profile)
    rows = (await session.execute(
        select(BurpeeAudit, actor.display_name, target.display_name)
        .outerjoin(actor, actor.user_id == BurpeeAudit.actor_id)
        .outerjoin(target, target.user_id == BurpeeAudit.target_id)
        .order_by(BurpeeAudit.occurred_at.desc(), BurpeeAudit.id.desc())
        .limit(limit)
    )).all()

    out = []
    for a, actor_name, target_name in rows:
        rec = {
            "occurred_at": a.occurred_at,
            "action": a.action,
            "actor_name": actor_name or DEFAULT_DISPLAY_NAME,
            "target_name": target_name or DEFAULT_DISPLAY_NAME,
            "entry_date": a.entry_date,
            "old_burpees": a.old_burpees,
            "new_burpees": a.new_burpees,
        }
        rec["summary"] = describe(rec)
        out.append(rec)
    return out
