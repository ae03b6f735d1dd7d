import os
import logging
from typing import Callable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"
DEFAULT_LOG_LEVEL = "INFO"

T = TypeVar("T")


def _env_number(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}; using {default}")
        return default


def _env_log_level() -> str:
    level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    # getLevelName returns an int only for registered level names
    if not isinstance(logging.getLevelName(level), int):
        logger.warning(f"Ignoring unknown LOG_LEVEL={level!r}; using {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return level


class Settings:
    """Process-wide configuration read from the environment.

    A fresh instance is built for every request (see ``get_settings``) so the
    webhook URL is read at the start of each submission and never cached.
    Malformed numbers or log levels fall back to their defaults with a warning.
    """

    def __init__(self):
        self.webhook_url: Optional[str] = os.getenv("GOOGLE_WEBHOOK_URL") or None
        self.webhook_timeout = _env_number("WEBHOOK_TIMEOUT", 30.0, float)
        self.timestamp_format = os.getenv("TIMESTAMP_FORMAT", DEFAULT_TIMESTAMP_FORMAT)
        self.log_level = _env_log_level()
        self.port = _env_number("PORT", 8000, int)

    @property
    def cors_origins(self) -> List[str]:
        raw = os.getenv("CORS_ORIGINS", "*")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def webhook_configured(self) -> bool:
        return bool(self.webhook_url and self.webhook_url.strip())


def get_settings() -> Settings:
    return Settings()
