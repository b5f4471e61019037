"""Centralized configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the working directory: .env, then .env.local
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed configuration loaded from env and `.env` files.

    Attributes
    ----------
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    csv_delimiter : str
        Field separator used by the CSV loaders; maps from `BLOCKMODEL_CSV_DELIMITER`.
    csv_encoding : str
        Text encoding used by the CSV loaders. The default also accepts files
        that start with a UTF-8 byte-order mark; maps from `BLOCKMODEL_CSV_ENCODING`.
    alignment_tolerance : float
        Largest distance from an integer that a grid offset may have and still
        count as aligned. ``0.0`` demands an exact integer; maps from
        `BLOCKMODEL_ALIGNMENT_TOLERANCE`.
    """

    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    csv_delimiter: str = Field(
        default=",", min_length=1, max_length=1, alias="BLOCKMODEL_CSV_DELIMITER"
    )
    csv_encoding: str = Field(default="utf-8-sig", alias="BLOCKMODEL_CSV_ENCODING")
    alignment_tolerance: float = Field(
        default=0.0, ge=0.0, lt=0.5, alias="BLOCKMODEL_ALIGNMENT_TOLERANCE"
    )

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Kept behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    return Settings()


# Ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "blockmodel") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    current = load_settings()
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(current.log_level_numeric())
    logger.propagate = False
    return logger
