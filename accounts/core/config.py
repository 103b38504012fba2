"""
Configuration for the accounts service.

``get_settings`` reads the environment once and returns a frozen Settings
object. Components receive it at construction time so nothing below the
app factory touches ``os.environ``.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str = "dev"
    port: int = 2244
    public_base_url: str = "http://localhost:2244"
    database_url: str = "sqlite:///./accounts.db"
    password_hash_cost: int = 3
    token_secret: str = ""
    smtp_host: str = ""
    smtp_port: int = 465
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from: str = ""
    smtp_timeout_seconds: int = 10
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _first(*names: str, default: str = "") -> str:
        for name in names:
            value = os.getenv(name)
            if value:
                return value
        return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        port=_int(os.getenv("PORT"), 2244),
        public_base_url=_first("PUBLIC_BASE_URL", "BASEURL", default="http://localhost:2244").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./accounts.db"),
        password_hash_cost=max(1, _int(_first("PASSWORD_HASH_COST", "SALT"), 3)),
        # legacy deployments signed tokens with the SendGrid key
        token_secret=_first("TOKEN_SECRET", "SENDGRID_API_KEY"),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        smtp_timeout_seconds=_int(os.getenv("SMTP_TIMEOUT_SECONDS", "10"), 10),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
