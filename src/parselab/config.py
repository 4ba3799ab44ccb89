"""
ParseLab configuration.

Settings are loaded from environment variables (prefix PARSELAB_) or a
.env file, with defaults suitable for interactive use.

Environment variables:
- PARSELAB_JSON_INDENT: Indentation of pretty-printed JSON (default: 2)
- PARSELAB_TOML_STRICT: Reject unrecognised TOML lines (default: False)
- PARSELAB_SEARCH_CASE_SENSITIVE: Default search case mode (default: False)
- PARSELAB_LOG_LEVEL: Logging level for configure_logging (default: "WARNING")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Runtime knobs for the format engines."""

    model_config = SettingsConfigDict(env_prefix="PARSELAB_", env_file=".env", extra="ignore")

    json_indent: int = Field(default=2, ge=0, description="Indentation of pretty-printed JSON")
    toml_strict: bool = Field(default=False, description="Raise on TOML lines that are not headers or key = value")
    search_case_sensitive: bool = Field(default=False, description="Default case mode for search()")
    log_level: str = Field(default="WARNING", description="Level used by configure_logging()")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache()
def get_settings(**kwargs: Any) -> Settings:
    """
    Get the cached Settings instance.

    Args:
        **kwargs: Overrides passed to Settings

    Returns:
        The one Settings instance for these overrides
    """
    return Settings(**kwargs)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install a basic root handler if none exists yet.

    Args:
        level: Logging level name; defaults to Settings.log_level
    """
    level = (level or get_settings().log_level).upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    logging.getLogger("parselab").setLevel(level)
    logger.debug("Logging configured at %s", level)
