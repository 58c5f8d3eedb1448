from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Header, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from burpeeboard.config import settings
from burpeeboard.db import get_session
from burpeeboard.auth_deps import get_current_user
from burpeeboard.models.user import User
from burpeeboard.schemas.auth import OtpRequest, OtpSent, VerifyRequest, UserPublic, TokenPair, SessionPublic
from burpeeboard.security import (
    make_access_token, make_refresh_token, make_magic_token, magic_link, decode_token, is_admin_email,
)
from burpeeboard.services.profiles import ensure_profile

router = APIRouter(prefix="/auth", tags=["auth"])
log = structlog.get_logger()

def _public(user: User) -> UserPublic:
    return UserPublic(id=user.id, email=user.email, created_at=user.created_at, is_admin=is_admin_email(user.email))

@router.post("/otp", response_model=OtpSent)
async def sign_in_with_otp(payload: OtpRequest):
    token = make_magic_token(payload.email)
    # Delivery is the mail relay's job; the link is logged for it to pick up.
    if settings.environment == "dev":
        log.info("magic_link_issued", email=payload.email.lower(), link=magic_link(token))
        return OtpSent(token=token)
    log.info("magic_link_issued", email=payload.email.lower())
    return OtpSent()

@router.post("/verify", response_model=SessionPublic)
async def verify(payload: VerifyRequest, session: AsyncSession = Depends(get_session)):
    try:
        data = decode_token(payload.token)
    except Exception:
        raise HTTPException(status_code=401, detail="Sign-in link is invalid or has expired")
    if data.get("type") != "magic":
        raise HTTPException(status_code=401, detail="Wrong token type")
    email = str(data.get("sub") or "").lower()
    user = await session.scalar(select(User).where(User.email == email))
    if not user:
        user = User(email=email)
        session.add(user)
        await session.flush()
        log.info("user_created", user_id=str(user.id))
    await ensure_profile(session, user.id)
    await session.commit()
    await session.refresh(user)
    sub = str(user.id)
    return SessionPublic(access=make_access_token(sub), refresh=make_refresh_token(sub), user=_public(user))

@router.post("/refresh", response_model=TokenPair)
async def refresh(authorization: str | None = Header(None)):
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing refresh token")
    token = authorization.split(" ", 1)[1]
    try:
        data = decode_token(token)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid token")
    if data.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Wrong token type")
    sub = data.get("sub")
    return TokenPair(access=make_access_token(sub), refresh=make_refresh_token(sub))

@router.get("/me", response_model=UserPublic)
async def me(user: User = Depends(get_current_user)):
    return _public(user)

@router.post("/signout", status_code=204)
async def sign_out(user: User = Depends(get_current_user)):
    # Tokens are stateless; the client drops its session.
    log.info("signed_out", user_id=str(user.id))
    return Response(status_code=204)
