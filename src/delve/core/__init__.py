"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DelveError: Base exception for all errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Argument validation errors.

    Configuration:
        Settings: Main settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up logging.
        get_logger: Get a configured logger instance.
        ensure_logging: Set up logging from settings unless already done.
        track_session: Choose the session stamped on log entries.
"""

from __future__ import annotations

from delve.core.config import (
    MIN_ROOM_SIZE,
    EngineSettings,
    GenerationSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from delve.core.exceptions import (
    ConfigurationError,
    DataTableError,
    DelveError,
    EntityNotFoundError,
    GameEngineError,
    GenerationError,
    InvalidGameStateError,
    UnknownActionError,
    ValidationError,
)
from delve.core.logging import (
    configure_logging,
    ensure_logging,
    get_logger,
    track_session,
)


__all__ = [
    # Base exception
    "DelveError",
    # Data, configuration and validation exceptions
    "DataTableError",
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "GenerationError",
    "UnknownActionError",
    "EntityNotFoundError",
    # Configuration
    "MIN_ROOM_SIZE",
    "Settings",
    "GenerationSettings",
    "EngineSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "ensure_logging",
    "get_logger",
    "track_session",
]
