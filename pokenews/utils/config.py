import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

DEFAULT_SOURCE_URL = "https://www.pokebeach.com/"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() != "false"


class Settings(BaseModel):
    news_source_url: str = DEFAULT_SOURCE_URL
    discord_webhook_url: Optional[str] = None
    rss_enabled: bool = True
    check_interval_minutes: int = 30
    post_delay_seconds: float = 1.0
    source_timezone: str = "UTC"
    fetch_timeout_seconds: float = 15.0

    @field_validator("source_timezone")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        # fuso precisa existir no banco tz do sistema
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown time zone: {v!r}") from e
        return v

    @classmethod
    def from_env(cls, load_env: bool = True, dotenv_override: bool = True) -> "Settings":
        """Lê configuração do ambiente (e do .env, se existir)."""
        if load_env:
            load_dotenv(override=dotenv_override)
        return cls(
            news_source_url=os.getenv("NEWS_SOURCE_URL") or DEFAULT_SOURCE_URL,
            # string vazia conta como "sem webhook"
            discord_webhook_url=os.getenv("DISCORD_WEBHOOK_URL") or None,
            rss_enabled=_env_bool("RSS_ENABLED", True),
            check_interval_minutes=int(os.getenv("CHECK_INTERVAL_MINUTES", "30")),
            post_delay_seconds=float(os.getenv("POST_DELAY_SECONDS", "1.0")),
            source_timezone=os.getenv("SOURCE_TIMEZONE", "UTC"),
            fetch_timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "15")),
        )
