from __future__ import annotations
import asyncio
import json
import uuid
from datetime import date, datetime, timezone

import httpx
import pytest

from burpeeboard.client.admin import AdminAccess, AdminView
from burpeeboard.client.backend import BackendClient, BackendError
from burpeeboard.client.home import HomeView
from burpeeboard.main import app
from burpeeboard.schemas.auth import SessionPublic


def _session(email: str = "jp@example.com") -> SessionPublic:
    return SessionPublic(
        access="access-token",
        refresh="refresh-token",
        user={"id": uuid.uuid4(), "email": email, "created_at": datetime.now(timezone.utc)},
    )


def _recording_transport(handler=None):
    seen: list[str] = []

    async def _handle(request: httpx.Request):
        seen.append(f"{request.method} {request.url.path}")
        if handler is None:
            raise AssertionError(f"unexpected request {request.method} {request.url.path}")
        res = handler(request)
        if asyncio.iscoroutine(res):
            res = await res
        return res

    return httpx.MockTransport(_handle), seen


@pytest.mark.asyncio
async def test_out_of_window_date_never_reaches_backend():
    transport, seen = _recording_transport()
    async with BackendClient("http://test", transport=transport) as client:
        await client.set_session(_session())
        view = HomeView(client)
        assert await view.submit_entry("2026-04-01", 50) is False
        assert await view.submit_entry(date(2026, 2, 28), 50) is False
    assert seen == []
    assert view.alerts == ["Date must be within March 1-31, 2026."] * 2


@pytest.mark.asyncio
async def test_negative_count_is_sent_as_zero():
    bodies = []

    def handler(request: httpx.Request):
        if request.method == "PUT":
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"entry_date": "2026-03-02", "burpees": 0})
        return httpx.Response(200, json=[])

    transport, _ = _recording_transport(handler)
    async with BackendClient("http://test", transport=transport) as client:
        await client.set_session(_session())
        view = HomeView(client)
        assert await view.submit_entry("2026-03-02", -7) is True
    assert bodies == [{"entry_date": "2026-03-02", "burpees": 0}]
    assert view.alerts == ["Saved!"]


@pytest.mark.asyncio
async def test_backend_error_is_shown_verbatim_without_reload():
    def handler(request: httpx.Request):
        if request.method == "PUT":
            return httpx.Response(500, json={"detail": "permission denied for table burpee_entries"})
        raise AssertionError("should not reload after a failed save")

    transport, seen = _recording_transport(handler)
    async with BackendClient("http://test", transport=transport) as client:
        await client.set_session(_session())
        view = HomeView(client)
        assert await view.submit_entry("2026-03-02", 10) is False
    assert view.alerts == ["permission denied for table burpee_entries"]
    assert seen == ["PUT /entries"]


@pytest.mark.asyncio
async def test_non_admin_is_denied_and_contestants_never_fetched():
    def handler(request: httpx.Request):
        if request.url.path == "/admin/is-admin":
            return httpx.Response(200, json={"is_admin": False})
        raise AssertionError(f"unexpected request {request.url.path}")

    transport, seen = _recording_transport(handler)
    async with BackendClient("http://test", transport=transport) as client:
        await client.set_session(_session())
        view = AdminView(client)
        assert view.state is AdminAccess.UNKNOWN
        assert view.status_text == "Loading…"
        assert await view.resolve() is AdminAccess.DENIED
        assert view.status_text == "Access denied."
        assert view.contestants == []
        assert await view.save(str(uuid.uuid4()), "2026-03-01", 10) is False
        # terminal: no re-check
        assert await view.resolve() is AdminAccess.DENIED
    assert seen == ["GET /admin/is-admin"]


@pytest.mark.asyncio
async def test_admin_without_session_makes_no_calls():
    transport, seen = _recording_transport()
    async with BackendClient("http://test", transport=transport) as client:
        view = AdminView(client)
        assert await view.resolve() is AdminAccess.DENIED
    assert seen == []


@pytest.mark.asyncio
async def test_failed_admin_check_counts_as_denied():
    transport, _ = _recording_transport(lambda r: httpx.Response(500, json={"detail": "rpc failed"}))
    async with BackendClient("http://test", transport=transport) as client:
        await client.set_session(_session())
        view = AdminView(client)
        assert await view.resolve() is AdminAccess.DENIED


@pytest.mark.asyncio
async def test_stale_reload_is_discarded():
    release_first = asyncio.Event()
    calls = {"leaderboard": 0}

    async def handler(request: httpx.Request):
        if request.url.path == "/leaderboard":
            calls["leaderboard"] += 1
            if calls["leaderboard"] == 1:
                await release_first.wait()
                return httpx.Response(200, json=[{"user_id": str(uuid.uuid4()), "display_name": "Old", "total_burpees": 1}])
            return httpx.Response(200, json=[{"user_id": str(uuid.uuid4()), "display_name": "New", "total_burpees": 2}])
        return httpx.Response(200, json=[])

    transport, _ = _recording_transport(handler)
    async with BackendClient("http://test", transport=transport) as client:
        await client.set_session(_session())
        view = HomeView(client)
        first = asyncio.create_task(view.load())
        await asyncio.sleep(0)
        while calls["leaderboard"] < 1:
            await asyncio.sleep(0)
        await view.load()
        release_first.set()
        await first
    assert [r["display_name"] for r in view.leaderboard] == ["New"]
    assert view.loading is False


@pytest.mark.asyncio
async def test_transport_failure_becomes_backend_error():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    transport, _ = _recording_transport(handler)
    async with BackendClient("http://test", transport=transport) as client:
        with pytest.raises(BackendError) as exc:
            await client.sign_in_with_otp("jp@example.com")
    assert "connection refused" in exc.value.message


@pytest.mark.asyncio
async def test_home_view_end_to_end(db):
    transport = httpx.ASGITransport(app=app)
    async with BackendClient("http://test", transport=transport) as client:
        view = HomeView(client, clock=lambda: date(2026, 3, 2))
        await view.mount()
        assert view.signed_in is False

        await view.sign_in("racer@example.com")
        assert view.alerts[-1] == "Check your email for the login link."

        sent = await client.sign_in_with_otp("racer@example.com")
        await client.verify_otp(sent["token"])  # subscribers reload on sign-in
        assert view.signed_in is True

        await view.save_display_name("Racer")
        assert await view.submit_entry("2026-03-01", 100)
        assert await view.submit_entry("2026-03-02", "60")
        assert await view.submit_entry("2026-03-02", 80)

        assert view.my_total == 180
        assert view.streak == 2
        assert view.percent == 6
        assert [(r["display_name"], r["total_burpees"]) for r in view.leaderboard] == [("Racer", 180)]
        assert view.audit_lines[0] == "Racer updated Racer's entry for 2026-03-02: 60 -> 80"

        await view.sign_out()
        assert view.signed_in is False
        assert view.entries == {} and view.leaderboard == []

        view.unmount()
        sent = await client.sign_in_with_otp("racer@example.com")
        await client.verify_otp(sent["token"])
        assert view.signed_in is False


@pytest.mark.asyncio
async def test_admin_view_end_to_end(db):
    transport = httpx.ASGITransport(app=app)
    async with BackendClient("http://test", transport=transport) as contestant:
        sent = await contestant.sign_in_with_otp("jp@example.com")
        s = await contestant.verify_otp(sent["token"])
        await contestant.upsert_profile("JP")
        jp_id = str(s.user.id)

        async with BackendClient("http://test", transport=transport) as admin_client:
            sent = await admin_client.sign_in_with_otp("admin@example.com")
            await admin_client.verify_otp(sent["token"])
            view = AdminView(admin_client)
            assert await view.resolve() is AdminAccess.AUTHORIZED
            assert jp_id in {c["user_id"] for c in view.contestants}

            assert await view.save(jp_id, "2026-03-09", 75) is True
            assert view.message == "Saved"
            assert await view.save(jp_id, "2026-04-09", 75) is False
            assert view.message.startswith("Date must be within")
            assert await view.save("", "2026-03-09", 75) is False

        assert await contestant.own_entries() == [{"entry_date": "2026-03-09", "burpees": 75}]
