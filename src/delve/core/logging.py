"""Structured developer logging for the delve simulation core.

Engine modules log through structlog loggers obtained with
``get_logger(__name__)``. Level and renderer come from ``Settings``
(``DELVE_LOG_LEVEL``, ``DELVE_DEBUG``, ``DELVE_JSON_LOGS``) unless the
caller passes them explicitly.

A ``Game`` registers itself as the active session when it is created, and
every log entry is stamped with that session's ``seed`` and current
``depth``. This log is separate from the in-game message log players read,
which lives on the engine context.

Entry points:
    - ``configure_logging()`` sets up structlog and stdlib logging from
      settings. Hosts that want control call it before creating a game.
    - ``ensure_logging()`` is what ``Game`` calls. It configures from
      settings only when nothing has configured structlog yet, so a host's
      own setup is left alone.

Example:
    >>> from delve.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("Level generated", rooms=9)
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Protocol

import structlog
from structlog.types import Processor

from delve.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


class SessionInfo(Protocol):
    """What the session processor reads from the active game."""

    @property
    def seed(self) -> int | None: ...

    @property
    def depth(self) -> int: ...


_active_session: ContextVar[SessionInfo | None] = ContextVar("delve_session", default=None)


def track_session(session: SessionInfo | None) -> None:
    """Make ``session`` the one whose seed and depth are stamped on logs.

    The most recently created game in the current context wins. Pass
    None to stop stamping.
    """
    _active_session.set(session)


def current_session() -> SessionInfo | None:
    return _active_session.get()


def add_session_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp the active session's seed and depth on a log entry.

    Values passed explicitly to the log call take precedence. Depth is
    read at log time, so entries follow the session across levels.
    """
    session = _active_session.get()
    if session is not None:
        event_dict.setdefault("seed", session.seed)
        event_dict.setdefault("depth", session.depth)
    return event_dict


class AppContext:
    """Processor adding the configured application name to each entry."""

    def __init__(self, app_name: str) -> None:
        self.app_name = app_name

    def __call__(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict["app"] = self.app_name
        return event_dict


def resolve_level(settings: Settings) -> str:
    """Effective log level: DEBUG in debug mode, else the configured level."""
    return "DEBUG" if settings.debug else settings.log_level


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
    settings: Settings | None = None,
) -> None:
    """Configure application-wide logging.

    Sets up structlog with console rendering for development or JSON
    rendering for machine consumption, and routes standard library
    logging through the same level.

    Args:
        level: Logging level name; defaults to the settings level, or
            DEBUG when debug mode is on. Unknown names mean INFO.
        json_format: Render JSON; defaults to ``settings.json_logs``.
        log_file: Optional path to a log file for persistent logging.
        settings: Settings to read defaults from; defaults to the cached
            settings.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    settings = settings or get_settings()
    if level is None:
        level = resolve_level(settings)
    if json_format is None:
        json_format = settings.json_logs

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_session_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        AppContext(settings.app_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logging.getLogger().addHandler(file_handler)


def ensure_logging(settings: Settings | None = None) -> bool:
    """Configure logging from settings unless structlog is already set up.

    Returns:
        True if this call configured logging.
    """
    if structlog.is_configured():
        return False
    configure_logging(settings=settings)
    return True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional name for the logger (typically __name__).

    Returns:
        A configured structlog BoundLogger instance.
    """
    return structlog.get_logger(name)


__all__ = [
    "SessionInfo",
    "AppContext",
    "add_session_context",
    "configure_logging",
    "current_session",
    "ensure_logging",
    "get_logger",
    "resolve_level",
    "track_session",
]
