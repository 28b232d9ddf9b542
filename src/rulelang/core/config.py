"""
Parser configuration.

Configuration is loaded from the [rulelang] table of a rulelang.toml file.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "rulelang.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ParserConfig(BaseModel):
    """Options for lexing, parsing and file discovery."""

    max_errors: int | None = Field(default=None, ge=1)
    hash_comments: bool = True
    encoding: str = "utf-8"
    file_patterns: list[str] = Field(default_factory=lambda: ["*.drl"])
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def find_config(start: Path) -> Path | None:
    """Return the rulelang.toml in ``start`` (or its directory, for a file), if any."""
    directory = start if start.is_dir() else start.parent
    candidate = directory / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_config(toml_path: Path | None) -> ParserConfig:
    """
    Load parser configuration from a TOML file.

    Args:
        toml_path: Path to a TOML file with a [rulelang] table

    Returns:
        ParserConfig with values from file or defaults

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    if toml_path is None or not toml_path.exists():
        return ParserConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

    section: dict[str, Any] = data.get("rulelang", {})
    if not section:
        logger.debug(f"No [rulelang] table in {toml_path}, using defaults")
        return ParserConfig()

    try:
        return ParserConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {toml_path}: {e}") from e
