"""Custom exception hierarchy for the delve simulation core.

Ordinary gameplay conditions (not enough energy, no path, nothing to pick
up, not enough mana) are never raised; they are reported through the
in-game message log. The exceptions below are reserved for misuse at the
boundary: bad configuration, unknown catalog keys, unknown actions,
stale entity handles and impossible generation requests.

All exceptions inherit from DelveError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Example:
    >>> from delve.core.exceptions import DataTableError
    >>> raise DataTableError("Unknown race", table="races", key="orc")
"""

from __future__ import annotations

from typing import Any


class DelveError(Exception):
    """Base exception for all delve errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(DelveError):
    """Base exception for all game engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when an operation is not allowed in the current game status.

    A finished game (dead or won) cannot be resumed; a new session must be
    constructed instead.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current status identifier.
            expected_states: List of statuses that would have been valid.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class GenerationError(GameEngineError):
    """Raised when a level cannot be generated from the requested parameters.

    Exhausted placement budgets never raise; this is only for dimensions or
    depths that make generation impossible.
    """

    def __init__(
        self,
        message: str,
        *,
        width: int | None = None,
        height: int | None = None,
        depth: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize generation error with grid context.

        Args:
            message: Human-readable error description.
            width: Requested grid width.
            height: Requested grid height.
            depth: Requested dungeon depth.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if width is not None:
            combined_details["width"] = width
        if height is not None:
            combined_details["height"] = height
        if depth is not None:
            combined_details["depth"] = depth
        super().__init__(message, details=combined_details)


class UnknownActionError(GameEngineError):
    """Raised when an action tag is not part of the action vocabulary."""

    def __init__(
        self,
        message: str,
        *,
        action: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown action error.

        Args:
            message: Human-readable error description.
            action: The action tag that was rejected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action is not None:
            combined_details["action"] = action
        super().__init__(message, details=combined_details)


class EntityNotFoundError(GameEngineError):
    """Raised when an entity handle refers to a freed or reused slot."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        generation: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize entity lookup error with handle context.

        Args:
            message: Human-readable error description.
            index: Slot index of the handle.
            generation: Generation counter of the handle.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if index is not None:
            combined_details["index"] = index
        if generation is not None:
            combined_details["generation"] = generation
        super().__init__(message, details=combined_details)


# =============================================================================
# Data, Configuration & Validation Exceptions
# =============================================================================


class DataTableError(DelveError):
    """Raised when a catalog lookup uses a key that does not exist."""

    def __init__(
        self,
        message: str,
        *,
        table: str | None = None,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize data table error with lookup context.

        Args:
            message: Human-readable error description.
            table: Name of the catalog that was searched.
            key: The key that was not found.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if table:
            combined_details["table"] = table
        if key is not None:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


class ConfigurationError(DelveError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(DelveError):
    """Raised when caller-supplied arguments fail validation."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the argument that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "DelveError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "GenerationError",
    "UnknownActionError",
    "EntityNotFoundError",
    # Data, configuration and validation exceptions
    "DataTableError",
    "ConfigurationError",
    "ValidationError",
]
