"""Tests for structured logging setup."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from types import SimpleNamespace

import pytest
import structlog

from delve.core.config import Settings
from delve.core.logging import (
    AppContext,
    add_session_context,
    configure_logging,
    current_session,
    ensure_logging,
    get_logger,
    resolve_level,
    track_session,
)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Leave structlog, root handlers and the active session as found."""
    structlog.reset_defaults()
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        root.removeHandler(handler)
        handler.close()
    structlog.reset_defaults()
    track_session(None)


def final_processors() -> list[object]:
    return list(structlog.get_config()["processors"])


class TestProcessors:
    """Tests for the app and session processors."""

    def test_app_context(self) -> None:
        """Test entries are tagged with the configured application name."""
        event = AppContext("crawler")(None, "info", {"event": "Level entered"})
        assert event == {"event": "Level entered", "app": "crawler"}

    def test_session_stamp(self) -> None:
        """Test the active session's seed and depth are added."""
        track_session(SimpleNamespace(seed=5, depth=3))

        event = add_session_context(None, "info", {"event": "Monster killed"})

        assert event == {"event": "Monster killed", "seed": 5, "depth": 3}

    def test_explicit_values_win(self) -> None:
        """Test values given at the call site are kept."""
        track_session(SimpleNamespace(seed=5, depth=3))

        event = add_session_context(None, "info", {"event": "Level entered", "depth": 4})

        assert event["depth"] == 4

    def test_no_session(self) -> None:
        """Test nothing is stamped without an active session."""
        assert add_session_context(None, "info", {"event": "x"}) == {"event": "x"}

    def test_depth_is_read_at_log_time(self) -> None:
        """Test entries follow the session as it changes level."""
        session = SimpleNamespace(seed=1, depth=1)
        track_session(session)
        capture = structlog.testing.LogCapture()
        structlog.configure(processors=[add_session_context, capture])

        logger = get_logger(__name__)
        logger.info("Level entered")
        session.depth = 2
        logger.info("Level entered")

        assert [entry["depth"] for entry in capture.entries] == [1, 2]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_from_settings(self) -> None:
        """Test the settings level is used when none is passed."""
        configure_logging(settings=Settings(log_level="WARNING"))

        assert logging.getLogger().level == logging.WARNING

    def test_debug_forces_debug_level(self) -> None:
        """Test debug mode overrides the configured level."""
        settings = Settings(debug=True, log_level="ERROR")

        assert resolve_level(settings) == "DEBUG"
        configure_logging(settings=settings)
        assert logging.getLogger().level == logging.DEBUG

    def test_json_and_app_name_from_settings(self) -> None:
        """Test the renderer and app tag follow the settings."""
        configure_logging(settings=Settings(json_logs=True, app_name="crawler"))

        processors = final_processors()
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert add_session_context in processors
        assert any(isinstance(p, AppContext) and p.app_name == "crawler" for p in processors)

    def test_explicit_arguments_override_settings(self) -> None:
        """Test explicit level and renderer beat the settings."""
        configure_logging(level="error", json_format=False, settings=Settings(json_logs=True))

        assert logging.getLogger().level == logging.ERROR
        assert isinstance(final_processors()[-1], structlog.dev.ConsoleRenderer)

    def test_file_handler(self, tmp_path: Path) -> None:
        """Test a log file handler is attached at the requested level."""
        configure_logging(level="debug", log_file=str(tmp_path / "delve.log"), settings=Settings())

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Test unrecognised level names mean INFO."""
        configure_logging(level="chatty", settings=Settings())

        assert logging.getLogger().level == logging.INFO


class TestEnsureLogging:
    """Tests for ensure_logging."""

    def test_configures_once(self) -> None:
        """Test only the first call configures structlog."""
        assert ensure_logging(Settings())
        assert structlog.is_configured()
        assert not ensure_logging(Settings(log_level="ERROR"))

    def test_host_configuration_is_kept(self) -> None:
        """Test an existing structlog setup is left alone."""
        capture = structlog.testing.LogCapture()
        structlog.configure(processors=[capture])

        assert not ensure_logging(Settings())
        assert final_processors() == [capture]


class TestGameSession:
    """Tests for the game's logging hookup."""

    def test_game_becomes_active_session(self, small_settings: Settings) -> None:
        """Test a new game configures logging and stamps its own context."""
        from delve.engine.game import Game

        game = Game(settings=small_settings, seed=4242)

        assert structlog.is_configured()
        assert current_session() is game
        assert add_session_context(None, "info", {}) == {"seed": 4242, "depth": 1}
