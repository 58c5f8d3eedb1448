from __future__ import annotations
import uuid
from datetime import date, datetime, timezone as dt_tz
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, Date, DateTime, Uuid, CheckConstraint
from burpeeboard.db import Base


def _utcnow() -> datetime:
    return datetime.now(dt_tz.utc)


class BurpeeAudit(Base):
    """
    Append-only change log for burpee_entries. One row per insert/update/delete,
    written in the same transaction as the change itself.
    """
    __tablename__ = "burpee_audit"
    __table_args__ = (
        CheckConstraint("action in ('INSERT', 'UPDATE', 'DELETE')", name="ck_audit_action"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True, nullable=False)
    action: Mapped[str] = mapped_column(String(8), nullable=False)  # INSERT | UPDATE | DELETE
    # No FK: the log outlives deleted users
    actor_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    target_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), index=True, nullable=False)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    old_burpees: Mapped[int | None] = mapped_column(Integer, nullable=True)
    new_burpees: Mapped[int | None] = mapped_column(Integer, nullable=True)
