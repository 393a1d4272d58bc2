"""Configuration management for the delve simulation core.

Engine defaults (grid size, sight range, scheduler limits, seed, logging)
are provided by pydantic-settings classes so a host can override them from
environment variables or a ``.env`` file without touching code.

Example:
    >>> from delve.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.generation.width
    60

Environment Variables:
    DELVE_SEED: Seed for the session random source (unset = unseeded)
    DELVE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DELVE_DEBUG: Force DEBUG logging
    DELVE_JSON_LOGS: Render logs as JSON
    DELVE_GEN_WIDTH / DELVE_GEN_HEIGHT: Dungeon grid dimensions
    DELVE_GEN_MAX_DEPTH: Depth of the final level
    DELVE_GEN_ENSURE_CONNECTIVITY: Force corridors to unreachable rooms
    DELVE_ENGINE_SIGHT_RANGE: Player sight radius in tiles
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from delve.core.exceptions import ConfigurationError


MIN_ROOM_SIZE = 4


class GenerationSettings(BaseSettings):
    """Configuration for dungeon generation.

    Attributes:
        width: Grid width in tiles.
        height: Grid height in tiles.
        max_depth: Depth of the final level (holds the last boss).
        ensure_connectivity: Carve extra corridors to rooms the flood fill
            from the spawn room cannot reach.
    """

    model_config = SettingsConfigDict(
        env_prefix="DELVE_GEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    width: int = Field(
        default=60,
        ge=12,
        le=400,
        description="Grid width in tiles",
    )
    height: int = Field(
        default=40,
        ge=12,
        le=400,
        description="Grid height in tiles",
    )
    max_depth: int = Field(
        default=15,
        ge=1,
        le=99,
        description="Depth of the final level",
    )
    ensure_connectivity: bool = Field(
        default=False,
        description="Repair unreachable rooms with forced corridors",
    )

    @model_validator(mode="after")
    def validate_room_space(self) -> "GenerationSettings":
        """Ensure the grid can hold at least one minimum-size room.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the smaller dimension is too small.
        """
        if min(self.width, self.height) // 3 < MIN_ROOM_SIZE:
            raise ConfigurationError(
                f"Grid {self.width}x{self.height} is too small for rooms of "
                f"size {MIN_ROOM_SIZE}",
                config_key="width",
            )
        return self


class EngineSettings(BaseSettings):
    """Configuration for turn scheduling and player defaults.

    Attributes:
        sight_range: Player sight radius in tiles.
        player_speed: Energy the player accrues per tick.
        max_drain_iterations: Safety cap on scheduler ticks per action.
        message_log_size: Number of player-facing messages retained.
    """

    model_config = SettingsConfigDict(
        env_prefix="DELVE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sight_range: int = Field(
        default=7,
        ge=1,
        le=50,
        description="Player sight radius",
    )
    player_speed: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Player energy gained per tick",
    )
    max_drain_iterations: int = Field(
        default=1000,
        ge=1,
        description="Scheduler ticks allowed per drain",
    )
    message_log_size: int = Field(
        default=50,
        ge=1,
        le=10_000,
        description="Retained player-facing messages",
    )


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name stamped on log entries.
        debug: Log at DEBUG regardless of ``log_level``.
        log_level: Logging level.
        json_logs: Render logs as JSON instead of console output.
        seed: Optional seed for the session random source.
        generation: Dungeon generation settings.
        engine: Scheduler and player settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DELVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="delve",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )
    seed: int | None = Field(
        default=None,
        ge=0,
        description="Seed for the session random source",
    )

    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log levels in any case."""
        if isinstance(value, str):
            return value.upper()
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.

    Example:
        >>> settings = get_settings()
        >>> settings.engine.sight_range
        7
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "MIN_ROOM_SIZE",
    "GenerationSettings",
    "EngineSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
