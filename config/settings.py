"""
Global configuration for the AiriPay rail router.

All values are read from environment variables (prefixed AIRIPAY_).
Defaults are safe for local development; override in production via .env or secrets manager.
"""

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthMode(str, Enum):
    AUTO    = "auto"     # API key when one is configured, otherwise open
    NONE    = "none"     # explicit dev mode, every request allowed
    API_KEY = "api_key"  # X-API-Key shared secret
    JWT     = "jwt"      # Authorization: Bearer <token>


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AIRIPAY_", env_file=".env")

    # ── Service ───────────────────────────────────────────────────────────
    service_name: str = "airipay_bank_orchestration"
    host: str = "0.0.0.0"
    port: int = 4000

    # ── Auth ──────────────────────────────────────────────────────────────
    auth_mode: AuthMode = AuthMode.AUTO
    api_key: str = ""                             # empty = no key configured
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"

    # ── HTTP ──────────────────────────────────────────────────────────────
    cors_origins: list[str] = ["*"]               # lock down in production

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = "INFO"


settings = Settings()
