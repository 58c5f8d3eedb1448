from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from burpeeboard.config import settings
from burpeeboard.contest import CONTEST_START, CONTEST_END, MONTH_GOAL
from burpeeboard.logging_setup import configure_logging
from burpeeboard.routes.system import router as system_router
from burpeeboard.routes.auth import router as auth_router
from burpeeboard.routes.dashboard import router as dashboard_router
from burpeeboard.routes.profile import router as profile_router
from burpeeboard.routes.entries import router as entries_router
from burpeeboard.routes.leaderboard import router as leaderboard_router
from burpeeboard.routes.audit import router as audit_router
from burpeeboard.routes.admin import router as admin_router
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(
        "startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha,
        contest_start=CONTEST_START.isoformat(), contest_end=CONTEST_END.isoformat(), goal=MONTH_GOAL,
    )
    yield
    log.info("shutdown")

app = FastAPI(
    title=settings.contest_name,
    version=settings.app_version,
    lifespan=lifespan,
    description="Log burpees privately, compete on totals publicly.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system_router)
app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(profile_router)
app.include_router(entries_router)
app.include_router(leaderboard_router)
app.include_router(audit_router)
app.include_router(admin_router)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    structlog.contextvars.clear_contextvars()
    return response
