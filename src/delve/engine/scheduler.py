"""Energy-based turn scheduling.

Every actor accrues its speed in energy once per tick and may act whenever
it holds at least ``ACTION_COST``. The player acts through
``Game.submit_action``; monsters act inside the drain loop, which runs
ticks until the player is ready again.

Follow-up steps of auto-run and path-walk are deferred callables. The
default ``ContinuationQueue`` runs them synchronously once the outermost
call finishes, so a host can swap in a timer without changing the engine.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import NamedTuple

from delve.core.logging import get_logger
from delve.models.character import Character
from delve.models.entities import EntityHandle, Monster, MonsterArena


logger = get_logger(__name__)

ACTION_COST = 100

MonsterStep = Callable[[EntityHandle, Monster], None]


class DrainResult(NamedTuple):
    """Outcome of one drain.

    Attributes:
        ticks: Ticks advanced.
        aborted: True if the game stopped running mid-drain.
    """

    ticks: int
    aborted: bool


class TurnScheduler:
    """Advances game time until the player can act.

    Attributes:
        tick: Ticks elapsed this session.
        max_iterations: Safety cap on ticks per drain.
    """

    def __init__(self, max_iterations: int = 1000) -> None:
        self.tick = 0
        self.max_iterations = max_iterations

    def drain(
        self,
        character: Character,
        monsters: MonsterArena,
        monster_step: MonsterStep,
        is_running: Callable[[], bool],
    ) -> DrainResult:
        """Run ticks until the player holds enough energy to act.

        Per tick the player accrues first, then each monster in slot order
        accrues and acts as many times as its energy allows, then spell
        cooldowns count down.

        Args:
            character: The player's character.
            monsters: Live monsters.
            monster_step: AI callback for one monster action.
            is_running: Returns False once the game stops playing.

        Returns:
            The number of ticks run and whether the drain was cut short.
        """
        ticks = 0
        while character.energy < ACTION_COST and ticks < self.max_iterations:
            self.tick += 1
            ticks += 1
            character.energy += character.speed

            for handle, monster in monsters.items():
                monster.energy += monster.speed
                while monster.energy >= ACTION_COST:
                    monster_step(handle, monster)
                    monster.energy -= ACTION_COST
                    if not is_running():
                        return DrainResult(ticks, aborted=True)

            character.tick_cooldowns()

        if character.energy < ACTION_COST:
            logger.warning(
                "Drain hit iteration cap",
                max_iterations=self.max_iterations,
                player_energy=character.energy,
                player_speed=character.speed,
            )
        return DrainResult(ticks, aborted=False)


class ContinuationQueue:
    """Trampoline for deferred follow-up steps.

    ``run`` executes queued callables until none remain. Nested calls are
    no-ops, so only the outermost entry point drains the queue and the
    call stack stays flat across long auto-runs.
    """

    def __init__(self) -> None:
        self._pending: deque[Callable[[], None]] = deque()
        self._running = False

    def defer(self, step: Callable[[], None]) -> None:
        self._pending.append(step)

    def run(self) -> int:
        """Execute pending steps, including ones they enqueue.

        Returns:
            Number of steps executed.
        """
        if self._running:
            return 0
        self._running = True
        executed = 0
        try:
            while self._pending:
                step = self._pending.popleft()
                step()
                executed += 1
        finally:
            self._running = False
        return executed

    def clear(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)


__all__ = [
    "ACTION_COST",
    "MonsterStep",
    "DrainResult",
    "TurnScheduler",
    "ContinuationQueue",
]
