"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the delve test suite.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest

from support import OPEN_ROOM, SequenceRandom, install_level, make_context


if TYPE_CHECKING:
    from collections.abc import Generator

    from delve.core.config import Settings
    from delve.data.tables import GameTables
    from delve.engine.context import GameContext
    from delve.engine.game import Game


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from delve.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DELVE_DEBUG": "true",
        "DELVE_LOG_LEVEL": "debug",
        "DELVE_SEED": "1234",
        "DELVE_GEN_WIDTH": "40",
        "DELVE_ENGINE_SIGHT_RANGE": "5",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def small_settings() -> Settings:
    """Settings for a compact, fast dungeon."""
    from delve.core.config import EngineSettings, GenerationSettings, Settings

    return Settings(
        generation=GenerationSettings(width=36, height=24, max_depth=15),
        engine=EngineSettings(),
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def tables() -> GameTables:
    """The built-in catalog."""
    from delve.data import default_tables

    return default_tables()


@pytest.fixture
def rng() -> random.Random:
    """A seeded random source for reproducible tests."""
    return random.Random(1234)


@pytest.fixture
def scripted_rng() -> SequenceRandom:
    """A scripted random source that never triggers low-probability rolls."""
    return SequenceRandom()


@pytest.fixture
def room_context() -> GameContext:
    """Context with the player in the middle of an open room."""
    return make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom())


@pytest.fixture
def game(small_settings: Settings) -> Game:
    """A seeded game on a compact dungeon."""
    from delve.engine.game import Game

    return Game(race="human", char_class="warrior", settings=small_settings, seed=4242)


@pytest.fixture
def sketch_game(game: Game) -> Game:
    """A game whose level has been swapped for an open room."""
    install_level(game, OPEN_ROOM, player=(4, 3))
    return game
