# Area: Shared
"""
escrims.config — Package configuration
======================================

Settings are resolved in this order, later sources winning:

1. Field defaults
2. JSON config file (optional)
3. ``.env`` file (optional)
4. Process environment

Environment variables:
    ESCRIMS_DB_PATH               SQLite file for SqliteScrimRepository
    ESCRIMS_LOG_FILE              JSON-lines log file
    ESCRIMS_LOG_LEVEL             DEBUG, INFO, WARNING, ERROR or CRITICAL
    ESCRIMS_DEFAULT_STRATEGY      MMR, Latency or History
    ESCRIMS_START_WINDOW_MINUTES  How early a confirmed scrim may start
"""

from __future__ import annotations
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pydantic
from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator

from .errors import NotFoundError, ValidationError
from .games import Game
from ._lifecycle.scrim import Scrim
from ._shared import logging_config
from ._matchmaking.latency import LatencyStrategy
from ._matchmaking.registry import MATCHMAKING
from ._matchmaking.base import MatchmakingStrategy

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variable -> config field
ENV_MAPPINGS = {
    "ESCRIMS_DB_PATH": "db_path",
    "ESCRIMS_LOG_FILE": "log_file",
    "ESCRIMS_LOG_LEVEL": "log_level",
    "ESCRIMS_DEFAULT_STRATEGY": "default_strategy",
    "ESCRIMS_START_WINDOW_MINUTES": "start_window_minutes",
}


class EscrimsConfig(BaseModel):
    """Validated runtime settings."""

    model_config = {"extra": "ignore", "frozen": True}

    db_path: str = "escrims.db"
    log_file: str = "escrims.log"
    log_level: str = "INFO"
    default_strategy: str = "MMR"
    start_window_minutes: int = Field(default=10, ge=0)
    latency_step_ms: int = Field(default=20, gt=0)
    latency_ceiling_ms: int = Field(default=300, gt=0)

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("default_strategy")
    @classmethod
    def _check_strategy(cls, value: str) -> str:
        try:
            return MATCHMAKING.by_name(value).name
        except NotFoundError as e:
            raise ValueError(e.message) from None

    def strategy(self) -> MatchmakingStrategy:
        """The default strategy, with this config's latency tuning applied."""
        if self.default_strategy == LatencyStrategy.name:
            return LatencyStrategy(self.latency_step_ms, self.latency_ceiling_ms)
        return MATCHMAKING.by_name(self.default_strategy)

    def setup_logging(self) -> logging.Logger:
        """Install the package log handlers using log_file and log_level."""
        return logging_config.setup_logging(self.log_file, self.log_level)

    def create_scrim(self, game: Game, scheduled_at: datetime, rank_min: int,
                     rank_max: int, **kwargs: Any) -> Scrim:
        """
        Create a scrim with this config's start window and default strategy.

        Keyword arguments are passed to ``Scrim`` and win over the config.
        """
        kwargs.setdefault("start_window_minutes", self.start_window_minutes)
        kwargs.setdefault("matchmaking_strategy", self.default_strategy)
        return Scrim(game, scheduled_at, rank_min, rank_max, **kwargs)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = ".env",
    environ: Optional[Dict[str, str]] = None,
) -> EscrimsConfig:
    """
    Load configuration from file and environment.

    Args:
        config_path: JSON file with config field names as keys
        env_file: dotenv file read before the process environment
        environ: Environment mapping, defaults to ``os.environ``

    Raises:
        ValidationError: If the file is unreadable or a value is invalid
    """
    values: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    values.update(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                raise ValidationError(
                    f"Could not read config file {path}: {e}", path=str(path)
                ) from e

    env: Dict[str, Any] = {}
    if env_file and Path(env_file).exists():
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(os.environ if environ is None else environ)

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in env:
            values[config_key] = env[env_key]

    try:
        return EscrimsConfig(**values)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"Invalid configuration: {e.errors()[0]['msg']}",
            errors=[err["loc"] for err in e.errors()],
        ) from e
