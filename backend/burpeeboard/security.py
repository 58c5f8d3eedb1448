from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any
import jwt
from burpeeboard.config import settings

JWT_ALG = "HS256"

def _make_token(sub: str, ttl_min: int, token_type: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "type": token_type,
        "iat": now.timestamp(),  # float keeps consecutive tokens distinct
        "exp": int((now + timedelta(minutes=ttl_min)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALG)

def make_access_token(sub: str) -> str:
    return _make_token(sub, settings.access_ttl_min, "access")

def make_refresh_token(sub: str) -> str:
    return _make_token(sub, settings.refresh_ttl_min, "refresh")

def make_magic_token(email: str) -> str:
    # sub is the email: the user row may not exist yet
    return _make_token(email.lower(), settings.magic_link_ttl_min, "magic")

def magic_link(token: str) -> str:
    return f"{settings.site_url.rstrip('/')}/auth/callback?token={token}"

def decode_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.jwt_secret, algorithms=[JWT_ALG])

def is_admin_email(email: str | None) -> bool:
    return bool(email) and email.lower() in settings.admin_emails
