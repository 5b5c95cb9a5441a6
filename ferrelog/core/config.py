# ferrelog/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Supabase Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - OPENAI_API_KEY (logistics assistant; without it the assistant
        answers with a fixed "not configured" message)
    """

    PROJECT_NAME: str = "FerreNico Logistics API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Logistics assistant
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Branding printed on shipment tickets
    STORE_NAME: str = "Ferre Don Nico"
    STORE_LOCATION: str = "Jilotepec de Molina Enríquez"
    # Plus code of the store, used as origin for distance lookups in Maps
    STORE_MAPS_ORIGIN: str = "XF29+6J5 Jilotepec de Molina Enriquez"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
