"""
hotel_desk.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (session signing secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SESSION_SECRET = "dev-secret-change-me-0123456789abcdef"


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `HOTEL_`).
    Defaults are safe for local dev; prod must override the session secret.
    """

    model_config = SettingsConfigDict(env_prefix="HOTEL_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and seeding.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "hotel-desk"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Session token (client-held, signed)
    session_alg: str = "HS256"
    session_issuer: str = "hotel-desk"
    session_secret: str = Field(default=DEV_SESSION_SECRET, repr=False)
    session_ttl_seconds: int = Field(default=3600, ge=1)
    session_cookie_name: str = "hotel_session"

    # Guard redirect targets
    login_path: str = "/login"
    home_path: str = "/"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./hotel.db"

    # Seeded administrator (upserted on startup in dev/test)
    seed_admin_code: str = "9999999"
    seed_admin_name: str = "Admin"

    # Employee documents
    upload_dir: str = "./uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    # Stock items below this quantity count as low stock on the dashboard.
    low_stock_threshold: int = 10

    @model_validator(mode="after")
    def _require_real_secret_in_prod(self) -> Settings:
        if self.env == "prod" and self.session_secret == DEV_SESSION_SECRET:
            raise ValueError("HOTEL_SESSION_SECRET must be set in prod")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every layer reads configuration through `Settings`; nothing reads os.environ directly
# except the Alembic env (which runs outside the app).
