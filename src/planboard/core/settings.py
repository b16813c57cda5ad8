"""Centralized application configuration using Pydantic Settings (v2).

There is no module-level instance; `load_settings()` builds and caches a
`Settings` object that reads from:
- Real environment variables (highest precedence)
- `.env` files at the working directory: .env, .env.local, .env.dev/.env.test/.env.prod

History depth and the location of the persisted board live here so that the
workspace, the CLI and the tests all agree on one source of truth.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

#: Number of undo steps kept by default.
DEFAULT_HISTORY_LIMIT = 20


def _default_storage_path() -> Path:
    return Path.home() / ".planboard" / "board.json"


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `PLANBOARD_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    history_limit : int
        Maximum number of undo steps kept by the temporal log; maps from
        `PLANBOARD_HISTORY_LIMIT`.
    storage_path : Path
        JSON file holding the persisted board; maps from `PLANBOARD_STORAGE_PATH`.
    """

    environment: EnvName = Field(default="dev", alias="PLANBOARD_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=1, alias="PLANBOARD_HISTORY_LIMIT")
    storage_path: Path = Field(default_factory=_default_storage_path, alias="PLANBOARD_STORAGE_PATH")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("PLANBOARD_ENV", "dev")
    return Settings()


def get_logger(name: str = "planboard") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger


__all__ = ["Settings", "load_settings", "get_logger", "DEFAULT_HISTORY_LIMIT"]
