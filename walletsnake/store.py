"""Single-writer container publishing successive world generations."""

from __future__ import annotations

import random
import threading
from typing import Callable, Optional, Tuple

from . import collision, world
from .config import DEFAULT_CONFIG, GameConfig
from .snake import Direction


class WorldStore:
    """Own the current :class:`~walletsnake.world.GameState` snapshot.

    Each mutation reads the latest snapshot, computes its successor and
    publishes it while holding the store lock, so the render tick, the
    price refresh and player input can never interleave into a torn state.
    """

    def __init__(
        self,
        state: world.GameState,
        config: GameConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self._state = state
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> world.GameState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def update(self, fn: Callable[..., world.GameState], *args) -> world.GameState:
        """Replace the state with ``fn(state, *args)`` atomically and return it."""

        with self._lock:
            return self._publish(fn(self._state, *args))

    def _publish(self, new_state: world.GameState) -> world.GameState:
        # Caller holds the lock.
        if new_state is not self._state:
            self._state = new_state
            self._generation += 1
        return new_state

    def tick(self) -> world.GameState:
        return self.update(world.tick, self.rng, self.config)

    def steer(self, direction: Direction) -> world.GameState:
        return self.update(world.steer, direction)

    def select(self, snake_id: str) -> world.GameState:
        return self.update(world.select_snake, snake_id)

    def cycle_selection(self, step: int = 1) -> world.GameState:
        return self.update(world.cycle_selection, step)

    def apply_prices(self, prices) -> world.GameState:
        return self.update(world.apply_prices, prices, self.config)

    def set_running(self, running: bool) -> world.GameState:
        return self.update(world.set_running, running)

    def stop(self) -> world.GameState:
        return self.set_running(False)

    def consume(self) -> Tuple[world.GameState, collision.ConsumptionEvents]:
        """Run collision detection for the current frame and apply the results."""

        with self._lock:
            new_state, events = collision.resolve_consumption(self._state, self.rng, self.config)
            return self._publish(new_state), events
