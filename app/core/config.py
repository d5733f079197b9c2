# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Supabase Postgres connection string,
        or sqlite:// for local runs)

    Optional:
      - SUPABASE_URL + SUPABASE_SERVICE_ROLE_KEY (poster uploads to Storage)
      - FIRST_ADMIN_* (only read by seed_admin.py)
    """

    PROJECT_NAME: str = "Cinema Requests API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str

    # Opaque session tokens live this long after sign-in / sign-up
    SESSION_TTL_DAYS: int = 7

    # Zone that defines a "calendar day" for the daily order histogram
    TIMEZONE: str = "UTC"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Supabase Storage (movie posters). Service role key bypasses RLS.
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_STORAGE_BUCKET: str = "posters"

    # Bootstrap admin
    FIRST_ADMIN_EMAIL: str = ""
    FIRST_ADMIN_PASSWORD: str = ""
    FIRST_ADMIN_NAME: str = "Admin"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
