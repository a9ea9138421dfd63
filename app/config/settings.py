"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

import re

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    telegram_bot_token: str
    telegram_bot_username: str | None = None

    # Admin (single operator identity)
    admin_telegram_id: str

    # Storage
    database_url: str = "sqlite+aiosqlite:///voucherhub.db"
    database_echo: bool = False

    # Redis (optional, enables cross-process category locks)
    redis_url: str | None = None
    lock_timeout: int = Field(
        default=30, ge=1, description="Redis lock expiry in seconds"
    )

    # Channels
    required_channel: str = "@SheinVoucherHub"
    required_channel_url: str = "https://t.me/SheinVoucherHub"
    orders_notify_channel_id: str = "@OrdersNotify"
    orders_notify_channel_url: str = "https://t.me/OrdersNotify"

    # Payment
    payment_qr_url: str = (
        "https://i.supaimg.com/00332ad4-8aa7-408f-8705-55dbc91ea737.jpg"
    )
    currency_symbol: str = "₹"

    # Broadcast settings
    broadcast_rate_limit: int = Field(
        default=15, ge=1, description="Broadcast messages per second"
    )

    # Sessions
    session_idle_ttl: int = Field(
        default=0,
        ge=0,
        description="Evict sessions idle longer than this (seconds, 0 = never)",
    )

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production":
            if self.debug:
                raise ValueError(
                    "DEBUG must be False in production environment. "
                    "Set DEBUG=false in your .env file."
                )
            if self.database_url.startswith("sqlite"):
                logger.warning(
                    "DATABASE_URL points at SQLite in production. "
                    "Use PostgreSQL for anything beyond a single small shop."
                )
        return self

    @field_validator("telegram_bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate Telegram bot token format."""
        pattern = r"^\d+:[A-Za-z0-9_-]{35}$"
        if not re.match(pattern, v):
            raise ValueError(
                "Invalid Telegram bot token format. "
                "Expected format: 123456789:ABCdefGHIjklMNOpqrsTUVwxyz"
            )
        return v

    @field_validator("admin_telegram_id", mode="before")
    @classmethod
    def validate_admin_id(cls, v: object) -> str:
        """Admin identity is kept as a canonical decimal string."""
        value = str(v).strip()
        if not re.fullmatch(r"-?[0-9]+", value):
            raise ValueError(f"Invalid admin Telegram ID: {value!r}")
        return value

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
            raise ValueError(
                "DATABASE_URL must start with postgresql+asyncpg:// "
                "or sqlite+aiosqlite://"
            )
        return v

    def is_admin(self, user_id: str) -> bool:
        """Check a canonical user ID against the configured admin."""
        return str(user_id) == self.admin_telegram_id


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
