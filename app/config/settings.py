"""
Process-wide settings for the bridge.

Settings are read from the environment once, at start-up, into an immutable
``Settings`` instance that is handed to the components that need it.
"""

import os
from dataclasses import dataclass
from typing import Optional

from app.config.constants import (
    DEFAULT_BACKEND_BASE_URL,
    WEBHOOK_FORMAT_TEXT,
    WEBHOOK_FORMATS,
)


@dataclass(frozen=True)
class Settings:
    """Immutable configuration for the bridge and its backend connection."""

    backend_base_url: str = DEFAULT_BACKEND_BASE_URL
    bot_id: str = ""
    bot_token: str = ""
    signing_secret: Optional[str] = None
    webhook_format: str = WEBHOOK_FORMAT_TEXT
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    def __post_init__(self):
        if self.webhook_format not in WEBHOOK_FORMATS:
            raise ValueError(
                f"Unsupported webhook format: {self.webhook_format!r} "
                f"(expected one of {', '.join(WEBHOOK_FORMATS)})"
            )


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Returns:
        Settings: the configuration for this process
    """
    return Settings(
        backend_base_url=os.getenv("BOTPRESS_BASE_URL", DEFAULT_BACKEND_BASE_URL).rstrip("/"),
        bot_id=os.getenv("BOTPRESS_BOT_ID", "").strip(),
        bot_token=os.getenv("BOTPRESS_TOKEN", "").strip(),
        signing_secret=os.getenv("RETELL_SIGNING_SECRET", "").strip() or None,
        webhook_format=os.getenv("RETELL_WEBHOOK_FORMAT", WEBHOOK_FORMAT_TEXT).strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
