"""HTTP client for the burpeeboard API.

Holds the signed-in session and notifies subscribers when it changes, so
every view reads the same identity. Backend failures surface as
BackendError carrying the server's own message text.
"""
from __future__ import annotations
import inspect
from datetime import date
from typing import Any, Awaitable, Callable, Literal
import httpx
import structlog

from burpeeboard.contest import CONTEST_START, CONTEST_END, AUDIT_FEED_LIMIT
from burpeeboard.schemas.auth import SessionPublic

log = structlog.get_logger()

AuthEvent = Literal["SIGNED_IN", "SIGNED_OUT", "TOKEN_REFRESHED"]
AuthListener = Callable[[AuthEvent, "SessionPublic | None"], "Awaitable[None] | None"]


class BackendError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class Subscription:
    def __init__(self, state: "AuthState", listener: AuthListener):
        self._state = state
        self._listener = listener

    def unsubscribe(self) -> None:
        self._state._listeners = [cb for cb in self._state._listeners if cb is not self._listener]


class AuthState:
    """Single source of truth for the current session."""

    def __init__(self):
        self._session: SessionPublic | None = None
        self._listeners: list[AuthListener] = []

    @property
    def session(self) -> SessionPublic | None:
        return self._session

    def subscribe(self, listener: AuthListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    async def emit(self, event: AuthEvent, session: SessionPublic | None) -> None:
        self._session = session
        for cb in list(self._listeners):
            res = cb(event, session)
            if inspect.isawaitable(res):
                await res


def _error_message(r: httpx.Response) -> str:
    try:
        detail = r.json().get("detail")
    except (ValueError, AttributeError):
        return r.text or r.reason_phrase
    if isinstance(detail, list):
        # pydantic validation errors
        return "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)
    return str(detail) if detail is not None else r.reason_phrase


class BackendClient:
    def __init__(self, base_url: str, *, transport: httpx.AsyncBaseTransport | None = None):
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)
        self.auth = AuthState()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, *, auth: bool = True, **kwargs) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        session = self.auth.session
        if auth and session is not None:
            headers["Authorization"] = f"Bearer {session.access}"
        try:
            r = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise BackendError(str(exc) or exc.__class__.__name__) from exc
        if r.status_code >= 400:
            raise BackendError(_error_message(r), status_code=r.status_code)
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    # --- auth ---

    def get_session(self) -> SessionPublic | None:
        return self.auth.session

    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        return self.auth.subscribe(listener)

    async def set_session(self, session: SessionPublic | None) -> None:
        await self.auth.emit("SIGNED_IN" if session else "SIGNED_OUT", session)

    async def sign_in_with_otp(self, email: str) -> dict:
        return await self._request("POST", "/auth/otp", auth=False, json={"email": email})

    async def verify_otp(self, token: str) -> SessionPublic:
        data = await self._request("POST", "/auth/verify", auth=False, json={"token": token})
        session = SessionPublic.model_validate(data)
        await self.auth.emit("SIGNED_IN", session)
        return session

    async def refresh_session(self) -> SessionPublic:
        current = self.auth.session
        if current is None:
            raise BackendError("Not signed in")
        data = await self._request(
            "POST", "/auth/refresh", auth=False, headers={"Authorization": f"Bearer {current.refresh}"}
        )
        session = current.model_copy(update={"access": data["access"], "refresh": data["refresh"]})
        await self.auth.emit("TOKEN_REFRESHED", session)
        return session

    async def sign_out(self) -> None:
        if self.auth.session is None:
            return
        try:
            await self._request("POST", "/auth/signout")
        except BackendError as exc:
            # the local session is dropped either way
            log.warning("signout_failed", error=exc.message)
        await self.auth.emit("SIGNED_OUT", None)

    # --- reads ---

    async def is_admin(self) -> bool:
        data = await self._request("GET", "/admin/is-admin")
        return bool(data.get("is_admin"))

    async def own_entries(self, start: date = CONTEST_START, end: date = CONTEST_END) -> list[dict]:
        return await self._request(
            "GET", "/entries", params={"start_date": start.isoformat(), "end_date": end.isoformat()}
        )

    async def leaderboard_totals(self, start: date = CONTEST_START, end: date = CONTEST_END) -> list[dict]:
        return await self._request(
            "GET", "/leaderboard", params={"start_date": start.isoformat(), "end_date": end.isoformat()}
        )

    async def audit_feed(self, limit: int = AUDIT_FEED_LIMIT) -> list[dict]:
        return await self._request("GET", "/audit", params={"limit": limit})

    async def get_profile(self) -> dict:
        return await self._request("GET", "/profile")

    async def list_contestants(self) -> list[dict]:
        return await self._request("GET", "/admin/contestants")

    # --- writes ---

    async def upsert_entry(self, entry_date: date, burpees: int) -> dict:
        return await self._request("PUT", "/entries", json={"entry_date": entry_date.isoformat(), "burpees": burpees})

    async def delete_entry(self, entry_date: date) -> None:
        await self._request("DELETE", f"/entries/{entry_date.isoformat()}")

    async def upsert_profile(self, display_name: str) -> dict:
        return await self._request("PUT", "/profile", json={"display_name": display_name})

    async def admin_set_entry(self, user_id: str, entry_date: date | str, burpees: Any) -> dict:
        if isinstance(entry_date, date):
            entry_date = entry_date.isoformat()
        return await self._request(
            "PUT", "/admin/entries", json={"user_id": str(user_id), "entry_date": entry_date, "burpees": burpees}
        )

    async def admin_set_display_name(self, user_id: str, display_name: str) -> dict:
        return await self._request("PUT", f"/admin/profiles/{user_id}", json={"display_name": display_name})
