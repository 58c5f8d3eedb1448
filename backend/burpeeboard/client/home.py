"""View model for the main contest page."""
from __future__ import annotations
import asyncio
from datetime import date
from typing import Any, Awaitable, Callable
import structlog

from burpeeboard.client.backend import BackendClient, BackendError
from burpeeboard.contest import MONTH_GOAL, in_window, window_label
from burpeeboard.schemas.auth import SessionPublic
from burpeeboard.services.audit import describe
from burpeeboard.services.charts import bar_chart, leaderboard_view, progress_doughnut
from burpeeboard.services.entries import clamp_count
from burpeeboard.services.progress import goal_progress
from burpeeboard.services.streak import calc_streak, entries_by_date, total_burpees

log = structlog.get_logger()


class HomeView:
    def __init__(
        self,
        client: BackendClient,
        *,
        alert: Callable[[str], None] | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.client = client
        self.alerts: list[str] = []
        self._alert = alert or self.alerts.append
        self._clock = clock
        self._subscription = None
        self._request_id = 0

        self.session: SessionPublic | None = client.get_session()
        self.entries: dict[date, int] = {}
        self.leaderboard_rows: list[dict[str, Any]] = []
        self.audit: list[dict[str, Any]] = []
        self.loading = False

    # --- lifecycle ---

    async def mount(self) -> None:
        self._subscription = self.client.on_auth_state_change(self._on_auth_change)
        self.session = self.client.get_session()
        await self.load()

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def _on_auth_change(self, event: str, session: SessionPublic | None) -> None:
        prev_uid = self.session.user.id if self.session else None
        self.session = session
        if session is None:
            self._clear()
        elif session.user.id != prev_uid:
            await self.load()

    def _clear(self) -> None:
        self._request_id += 1  # anything still in flight is now stale
        self.entries, self.leaderboard_rows, self.audit = {}, [], []
        self.loading = False

    @property
    def signed_in(self) -> bool:
        return self.session is not None

    # --- data ---

    async def load(self) -> None:
        """Fetch own entries, leaderboard and audit feed; the three may complete in any order."""
        if self.session is None:
            return
        self._request_id += 1
        rid = self._request_id
        self.loading = True
        await asyncio.gather(
            self._fetch(rid, "entries", self.client.own_entries, self._apply_entries),
            self._fetch(rid, "leaderboard", self.client.leaderboard_totals, self._apply_leaderboard),
            self._fetch(rid, "audit", self.client.audit_feed, self._apply_audit),
        )
        if rid == self._request_id:
            self.loading = False

    async def _fetch(self, rid: int, name: str, call: Callable[[], Awaitable[Any]], apply: Callable[[Any], None]) -> None:
        try:
            data = await call()
        except BackendError as exc:
            log.warning("fetch_failed", fetch=name, error=exc.message)
            data = []
        if rid != self._request_id:
            log.info("stale_response_discarded", fetch=name, request_id=rid, latest=self._request_id)
            return
        apply(data or [])

    def _apply_entries(self, rows: list[dict]) -> None:
        self.entries = entries_by_date(rows)

    def _apply_leaderboard(self, rows: list[dict]) -> None:
        self.leaderboard_rows = [{**r, "total_burpees": int(r.get("total_burpees") or 0)} for r in rows]

    def _apply_audit(self, rows: list[dict]) -> None:
        self.audit = rows

    # --- derived ---

    @property
    def my_total(self) -> int:
        return total_burpees(self.entries)

    @property
    def streak(self) -> int:
        return calc_streak(self.entries, self._clock())

    @property
    def percent(self) -> int:
        return goal_progress(self.my_total, MONTH_GOAL)

    @property
    def leaderboard(self) -> list[dict[str, Any]]:
        return leaderboard_view(self.leaderboard_rows, MONTH_GOAL)

    @property
    def bar_data(self) -> dict[str, Any]:
        return bar_chart(self.leaderboard_rows)

    @property
    def doughnut_data(self) -> dict[str, Any]:
        return progress_doughnut(self.my_total, MONTH_GOAL)

    @property
    def audit_lines(self) -> list[str]:
        return [describe(a) for a in self.audit]

    # --- actions ---

    async def sign_in(self, email: str) -> None:
        try:
            await self.client.sign_in_with_otp(email)
        except BackendError as exc:
            self._alert(exc.message)
            return
        self._alert("Check your email for the login link.")

    async def sign_out(self) -> None:
        await self.client.sign_out()

    async def submit_entry(self, entry_date: date | str, raw_count: Any) -> bool:
        if self.session is None:
            return False
        if isinstance(entry_date, str):
            try:
                entry_date = date.fromisoformat(entry_date)
            except ValueError:
                self._alert(f"Date must be within {window_label()}.")
                return False
        if not in_window(entry_date):
            self._alert(f"Date must be within {window_label()}.")
            return False

        value = clamp_count(raw_count)
        try:
            await self.client.upsert_entry(entry_date, value)
        except BackendError as exc:
            self._alert(exc.message)
            return False

        await self.load()
        self._alert("Saved!")
        return True

    async def save_display_name(self, name: str) -> None:
        if self.session is None:
            return
        try:
            await self.client.upsert_profile(name or "Anonymous")
        except BackendError as exc:
            self._alert(exc.message)
        await self.load()
