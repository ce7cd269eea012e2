"""Environment configuration and logging setup for llm_bridge."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class BridgeSettings(BaseSettings):
    """Settings from environment variables (or a local .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials, read from ANTHROPIC_API_KEY / OPENAI_API_KEY
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None

    # Endpoint overrides, e.g. for proxies
    anthropic_base_url: str | None = None
    openai_base_url: str | None = None

    timeout_s: float = 60.0

    # Logging
    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> BridgeSettings:
    """Get cached settings instance."""
    return BridgeSettings()


def configure_logging(
    level: str | None = None,
    fmt: str = "[%(levelname)s] [%(name)s] %(message)s",
) -> None:
    """
    Attach a console handler to the ``llm_bridge`` logger.

    The library only installs a ``NullHandler``; applications call this once
    at startup when they want to see request and error logs.

    Args:
        level: Log level string ("DEBUG", "INFO", "WARNING", "ERROR").
               Defaults to the LOG_LEVEL setting.
        fmt: Log format string for the console handler.
    """
    effective_level = (level or get_settings().log_level).upper()

    logger = logging.getLogger("llm_bridge")
    logger.setLevel(effective_level)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(fmt))
    logger.addHandler(console)
