"""Game world state and the operations that advance or mutate it.

Every function here is pure: it receives a :class:`GameState` and returns a
new one, leaving the input untouched. Hosts publish the returned state
through :class:`walletsnake.store.WorldStore` so that each change is applied
as one atomic generation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import math
import random
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from . import autonomy, growth, kinematics
from .config import DEFAULT_CONFIG, GameConfig
from .food import Food, spawn_food
from .snake import Direction, Snake, change_direction, create_snake
from .tokens import PricedToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the whole simulation."""

    snakes: Tuple[Snake, ...]
    food: Tuple[Food, ...]
    width: float
    height: float
    is_running: bool = False
    selected_id: Optional[str] = None
    score: int = 0
    tick: int = 0
    next_food_id: int = 1

    @property
    def controlled(self) -> Optional[Snake]:
        """Return the snake currently receiving player input, if any."""

        return find_snake(self, self.selected_id)


def find_snake(state: GameState, snake_id: Optional[str]) -> Optional[Snake]:
    if snake_id is None:
        return None
    for snake in state.snakes:
        if snake.id == snake_id:
            return snake
    return None


def empty_world(width: float = 0.0, height: float = 0.0) -> GameState:
    """Return an idle world with nothing in it."""

    return GameState(snakes=(), food=(), width=max(0.0, width), height=max(0.0, height))


def initialize_game(
    tokens: Sequence[PricedToken],
    width: float,
    height: float,
    *,
    rng: random.Random,
    config: GameConfig = DEFAULT_CONFIG,
) -> GameState:
    """Build the initial world from a priced token snapshot.

    The first token becomes the controlled snake. Degenerate input (no
    tokens, or bounds that are not positive) yields an idle empty world.
    """

    if not tokens or width <= 0 or height <= 0:
        logger.debug("Creating empty world for %d tokens, bounds %sx%s", len(tokens), width, height)
        return empty_world(width, height)

    snakes: List[Snake] = []
    seen = set()
    for token in tokens:
        if len(snakes) >= config.max_snakes:
            break
        if token.token_id in seen:
            continue
        seen.add(token.token_id)
        index = len(snakes)
        snakes.append(
            create_snake(token, width, height, index, index == 0, rng=rng, config=config)
        )

    food = spawn_food(1, config.food_count, width, height, rng, config)
    return GameState(
        snakes=tuple(snakes),
        food=tuple(food),
        width=float(width),
        height=float(height),
        is_running=True,
        selected_id=snakes[0].id,
        next_food_id=len(food) + 1,
    )


def tick(state: GameState, rng: random.Random, config: GameConfig = DEFAULT_CONFIG) -> GameState:
    """Advance every snake by one simulation step.

    Snakes other than the controlled one steer themselves first; all snakes
    then move. A stopped world is returned unchanged.
    """

    if not state.is_running:
        return state
    snakes = []
    for snake in state.snakes:
        if snake.id != state.selected_id:
            snake = autonomy.update_autonomous_direction(snake, rng, config)
        snakes.append(kinematics.move_snake(snake, state.width, state.height, config))
    return replace(state, snakes=tuple(snakes), tick=state.tick + 1)


def _map_snake(state: GameState, snake_id: Optional[str], fn) -> Tuple[Snake, ...]:
    return tuple(fn(snake) if snake.id == snake_id else snake for snake in state.snakes)


def steer(state: GameState, direction: Direction) -> GameState:
    """Apply a direction request to the controlled snake; reversals are ignored."""

    player = state.controlled
    if player is None:
        return state
    turned = change_direction(player, direction)
    if turned is player:
        return state
    return replace(state, snakes=_map_snake(state, player.id, lambda _: turned))


def select_snake(state: GameState, snake_id: str) -> GameState:
    """Hand player control to the snake with ``snake_id``."""

    if find_snake(state, snake_id) is None:
        logger.debug("Ignoring selection of unknown snake %s", snake_id)
        return state
    snakes = tuple(replace(snake, is_player=snake.id == snake_id) for snake in state.snakes)
    return replace(state, snakes=snakes, selected_id=snake_id)


def cycle_selection(state: GameState, step: int = 1) -> GameState:
    """Move player control ``step`` places along the creation order."""

    if not state.snakes:
        return state
    ids = [snake.id for snake in state.snakes]
    current = ids.index(state.selected_id) if state.selected_id in ids else 0
    return select_snake(state, ids[(current + step) % len(ids)])


def set_running(state: GameState, running: bool) -> GameState:
    """Start or stop the clock. A world without snakes can never run."""

    running = running and bool(state.snakes)
    if running == state.is_running:
        return state
    return replace(state, is_running=running)


def apply_prices(
    state: GameState, prices: Mapping[str, object], config: GameConfig = DEFAULT_CONFIG
) -> GameState:
    """Feed a fresh ``token_id -> price`` mapping into the growth model.

    Snakes without an entry, or with an unusable quote, keep their size.
    """

    snakes = tuple(
        growth.apply_price_quote(snake, prices[snake.id], config) if snake.id in prices else snake
        for snake in state.snakes
    )
    return replace(state, snakes=snakes)


def eat_food(
    state: GameState, food_id: int, rng: random.Random, config: GameConfig = DEFAULT_CONFIG
) -> GameState:
    """Resolve the controlled snake eating the food item ``food_id``.

    The item is replaced by a fresh one at a random position, so the food
    population never changes.
    """

    player = state.controlled
    eaten = next((item for item in state.food if item.id == food_id), None)
    if player is None or eaten is None:
        return state
    replacement = Food.spawn_random(state.next_food_id, state.width, state.height, rng, config)
    food = tuple(item for item in state.food if item.id != food_id) + (replacement,)
    logger.debug("%s ate food %s worth %s", player.symbol, food_id, eaten.value)
    return replace(
        state,
        food=food,
        snakes=_map_snake(state, player.id, lambda snake: growth.grow_from_food(snake, config)),
        score=state.score + eaten.value,
        next_food_id=state.next_food_id + 1,
    )


def prey_score(prey: Snake, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Return the score awarded for eating ``prey``."""

    return int(math.floor(prey.current_size * config.prey_score_multiplier))


def eat_snake(state: GameState, victim_id: str, config: GameConfig = DEFAULT_CONFIG) -> GameState:
    """Resolve the controlled snake eating the snake ``victim_id``."""

    player = state.controlled
    victim = find_snake(state, victim_id)
    if player is None or victim is None or victim.id == player.id:
        return state
    snakes = tuple(
        growth.grow_from_prey(snake, victim, config) if snake.id == player.id else snake
        for snake in state.snakes
        if snake.id != victim_id
    )
    logger.debug("%s ate %s", player.symbol, victim.symbol)
    return replace(state, snakes=snakes, score=state.score + prey_score(victim, config))


def standings(snakes: Iterable[Snake]) -> List[Snake]:
    """Return ``snakes`` ordered by token performance, best first."""

    return sorted(snakes, key=lambda snake: snake.token.price_change, reverse=True)
