# Area: Config Tests
"""Tests for escrims.config."""

import json
import logging
import pytest
from datetime import datetime, timedelta

from escrims import (
    VALORANT,
    EscrimsConfig,
    InvalidTransitionError,
    HistoryStrategy,
    LatencyStrategy,
    RankStrategy,
    ValidationError,
    load_config,
)
from escrims._shared.logging_config import JSONFormatter, TerminalFormatter


class TestLoadConfig:
    """Tests for load_config source ordering."""

    def test_defaults(self, tmp_path):
        """Test defaults apply when no source sets a value."""
        config = load_config(env_file=tmp_path / "missing.env", environ={})
        assert config.db_path == "escrims.db"
        assert config.log_level == "INFO"
        assert config.default_strategy == "MMR"
        assert config.start_window_minutes == 10

    def test_json_file(self, tmp_path):
        """Test values are read from a JSON config file."""
        path = tmp_path / "escrims.json"
        path.write_text(json.dumps({"db_path": "league.db", "latency_step_ms": 50}))
        config = load_config(path, env_file=None, environ={})
        assert config.db_path == "league.db"
        assert config.latency_step_ms == 50

    def test_env_file_overrides_json(self, tmp_path):
        """Test the dotenv file wins over the JSON file."""
        path = tmp_path / "escrims.json"
        path.write_text(json.dumps({"log_level": "WARNING"}))
        env_file = tmp_path / ".env"
        env_file.write_text("ESCRIMS_LOG_LEVEL=debug\nESCRIMS_START_WINDOW_MINUTES=5\n")
        config = load_config(path, env_file=env_file, environ={})
        assert config.log_level == "DEBUG"
        assert config.start_window_minutes == 5

    def test_environment_wins(self, tmp_path):
        """Test the process environment overrides the dotenv file."""
        env_file = tmp_path / ".env"
        env_file.write_text("ESCRIMS_DB_PATH=from_file.db\n")
        config = load_config(
            env_file=env_file, environ={"ESCRIMS_DB_PATH": "from_env.db"}
        )
        assert config.db_path == "from_env.db"

    def test_strategy_name_normalized(self, tmp_path):
        """Test strategy names are matched case-insensitively."""
        config = load_config(
            env_file=None, environ={"ESCRIMS_DEFAULT_STRATEGY": "history"}
        )
        assert config.default_strategy == "History"

    @pytest.mark.parametrize("key,value", [
        ("ESCRIMS_LOG_LEVEL", "LOUD"),
        ("ESCRIMS_DEFAULT_STRATEGY", "Random"),
        ("ESCRIMS_START_WINDOW_MINUTES", "-1"),
    ])
    def test_invalid_values(self, key, value):
        """Test invalid values raise the package ValidationError."""
        with pytest.raises(ValidationError):
            load_config(env_file=None, environ={key: value})

    def test_unreadable_json(self, tmp_path):
        """Test a malformed config file raises ValidationError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError):
            load_config(path, env_file=None, environ={})


class TestEscrimsConfig:
    """Tests for the helpers built from EscrimsConfig."""

    def test_latency_tuning_applied(self):
        """Test the Latency strategy gets the configured step and ceiling."""
        config = EscrimsConfig(
            default_strategy="Latency", latency_step_ms=50, latency_ceiling_ms=250
        )
        strategy = config.strategy()
        assert isinstance(strategy, LatencyStrategy)
        assert strategy.step_ms == 50
        assert strategy.ceiling_ms == 250

    def test_registry_strategies(self):
        """Test other strategies come from the registry."""
        assert isinstance(EscrimsConfig().strategy(), RankStrategy)
        assert isinstance(EscrimsConfig(default_strategy="History").strategy(), HistoryStrategy)

    def test_frozen(self):
        """Test a loaded config cannot be modified."""
        config = EscrimsConfig()
        with pytest.raises(Exception):
            config.db_path = "other.db"

    def test_setup_logging_uses_file_and_level(self, tmp_path):
        """Test setup_logging installs handlers for log_file at log_level."""
        config = EscrimsConfig(log_file=str(tmp_path / "run.log"), log_level="warning")
        logger = config.setup_logging()
        try:
            assert logger.level == logging.WARNING
            file_handlers = [
                h for h in logger.handlers if isinstance(h.formatter, JSONFormatter)
            ]
            assert len(file_handlers) == 1
            assert file_handlers[0].baseFilename == str(tmp_path / "run.log")
        finally:
            for handler in list(logger.handlers):
                if isinstance(handler.formatter, (TerminalFormatter, JSONFormatter)):
                    logger.removeHandler(handler)
                    handler.close()

    def test_create_scrim_applies_start_window(self):
        """Test scrims created from the config use its start window and strategy."""
        config = EscrimsConfig(start_window_minutes=30, default_strategy="latency")
        scheduled = datetime(2026, 3, 1, 20, 0)
        scrim = config.create_scrim(VALORANT, scheduled, rank_min=1000, rank_max=2000)
        assert scrim.start_window_minutes == 30
        assert scrim.matchmaking_strategy == "Latency"

        for i in range(scrim.slots):
            scrim.apply(f"u{i}", 1500, 40)
        for i in range(scrim.slots):
            scrim.confirm_attendance(f"u{i}")
        with pytest.raises(InvalidTransitionError):
            scrim.start(now=scheduled - timedelta(minutes=31))
        scrim.start(now=scheduled - timedelta(minutes=30))

    def test_create_scrim_arguments_win(self):
        """Test explicit keyword arguments override the config."""
        config = EscrimsConfig(start_window_minutes=30)
        scrim = config.create_scrim(
            VALORANT, datetime(2026, 3, 1), 1000, 2000, start_window_minutes=0
        )
        assert scrim.start_window_minutes == 0
