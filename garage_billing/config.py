# garage_billing/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Garage defaults ───────────────────────────────────────────────────
    # Used when a billing request omits capacity or rates
    DEFAULT_CAPACITY: int = 50
    DEFAULT_PER_HOUR: int = 300          # cents per billed hour
    DEFAULT_GRACE_MINUTES: int = 15

    # ── Limits ────────────────────────────────────────────────────────────
    MAX_EVENTS_PER_REQUEST: int = 10_000

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: Optional[str] = None   # defaults to <repo>/logs

    @property
    def DEFAULT_RATES(self) -> dict:
        return {"perHour": self.DEFAULT_PER_HOUR, "graceMinutes": self.DEFAULT_GRACE_MINUTES}

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
