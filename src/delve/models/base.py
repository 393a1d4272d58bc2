"""Shared pydantic base for mutable game-state models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GameModel(BaseModel):
    """Base class for all mutable state models.

    State models are pure data; the engine mutates them in place.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
        use_enum_values=True,
    )


__all__ = ["GameModel"]
