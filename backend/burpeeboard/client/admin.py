"""View model for the admin page: gated access plus the override form."""
from __future__ import annotations
import enum
from datetime import date
from typing import Any
import structlog

from burpeeboard.client.backend import BackendClient, BackendError
from burpeeboard.contest import CONTEST_START

log = structlog.get_logger()


class AdminAccess(str, enum.Enum):
    UNKNOWN = "unknown"
    DENIED = "denied"
    AUTHORIZED = "authorized"


class AdminView:
    """
    Access moves once from UNKNOWN to DENIED or AUTHORIZED and stays there for
    the life of the view. Contestant data is only fetched once AUTHORIZED.
    """

    def __init__(self, client: BackendClient):
        self.client = client
        self.state = AdminAccess.UNKNOWN
        self.contestants: list[dict[str, Any]] = []
        self.message = ""

    @property
    def status_text(self) -> str:
        if self.state is AdminAccess.UNKNOWN:
            return "Loading…"
        if self.state is AdminAccess.DENIED:
            return "Access denied."
        return "Admin - Edit Entries"

    async def resolve(self) -> AdminAccess:
        if self.state is not AdminAccess.UNKNOWN:
            return self.state
        if self.client.get_session() is None:
            self.state = AdminAccess.DENIED
            return self.state
        try:
            allowed = await self.client.is_admin()
        except BackendError as exc:
            log.warning("admin_check_failed", error=exc.message)
            allowed = False
        if not allowed:
            self.state = AdminAccess.DENIED
            return self.state

        self.state = AdminAccess.AUTHORIZED
        try:
            self.contestants = await self.client.list_contestants()
        except BackendError as exc:
            log.warning("fetch_failed", fetch="contestants", error=exc.message)
            self.contestants = []
        return self.state

    async def save(self, user_id: str | None, entry_date: date | str = CONTEST_START, burpees: Any = 0) -> bool:
        # The date picker bounds the date; it is not re-checked here.
        if self.state is not AdminAccess.AUTHORIZED or not user_id:
            return False
        self.message = ""
        try:
            await self.client.admin_set_entry(user_id, entry_date, burpees)
        except BackendError as exc:
            self.message = exc.message
            return False
        self.message = "Saved"
        return True
