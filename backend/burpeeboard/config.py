from __future__ import annotations
import os
from pydantic import BaseModel

def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "burpeeboard-api")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    database_url: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/burpees_dev")
    site_url: str = os.getenv("SITE_URL", "http://localhost:3000")

    # Auth
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret-change-me")
    access_ttl_min: int = int(os.getenv("ACCESS_TTL_MIN", "60"))
    refresh_ttl_min: int = int(os.getenv("REFRESH_TTL_MIN", "10080"))  # 7d
    magic_link_ttl_min: int = int(os.getenv("MAGIC_LINK_TTL_MIN", "15"))
    admin_emails: list[str] = [e.lower() for e in _split_csv(os.getenv("ADMIN_EMAILS"))]

    # Contest
    contest_name: str = os.getenv("CONTEST_NAME", "March 2026 Burpee Challenge")
    contest_start: str = os.getenv("CONTEST_START", "2026-03-01")
    contest_end: str = os.getenv("CONTEST_END", "2026-03-31")
    daily_goal: int = int(os.getenv("DAILY_GOAL", "100"))

settings = Settings()
