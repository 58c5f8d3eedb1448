from __future__ import annotations
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from burpeeboard.contest import DEFAULT_DISPLAY_NAME
from burpeeboard.models.profile import Profile

log = structlog.get_logger()


def normalize_name(name: str | None) -> str:
    return (name or "").strip() or DEFAULT_DISPLAY_NAME


async def ensure_profile(session: AsyncSession, user_id: UUID) -> Profile:
    """Create the default profile on first sign-in. Does not commit."""
    profile = await session.get(Profile, user_id)
    if profile:
        return profile
    profile = Profile(user_id=user_id, display_name=DEFAULT_DISPLAY_NAME)
    session.add(profile)
    await session.flush()
    return profile


async def save_display_name(session: AsyncSession, user_id: UUID, name: str | None) -> Profile:
    profile = await ensure_profile(session, user_id)
    profile.display_name = normalize_name(name)
    await session.commit()
    log.info("profile_saved", user_id=str(user_id), display_name=profile.display_name)
    return profile


async def list_profiles(session: AsyncSession) -> list[Profile]:
    return (await session.execute(
        select(Profile).order_by(Profile.display_name.asc())
    )).scalars().all()
