"""Collision detection and consumption for the controlled snake."""

from __future__ import annotations

from dataclasses import dataclass, field
import random
from typing import List, Tuple

from . import world
from .config import DEFAULT_CONFIG, GameConfig
from .snake import Snake
from .utils import Point


@dataclass
class ConsumptionEvents:
    """Everything the controlled snake reached during one frame."""

    food_ids: List[int] = field(default_factory=list)
    victim_ids: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.food_ids or self.victim_ids)


def _within(a: Point, b: Point, radius: float) -> bool:
    """Return ``True`` if ``b`` lies strictly inside the circle around ``a``."""

    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy < radius * radius


def hit_radius(snake: Snake, config: GameConfig = DEFAULT_CONFIG) -> float:
    return max(config.hit_radius_floor, snake.current_size)


def can_eat(hunter: Snake, prey: Snake, config: GameConfig = DEFAULT_CONFIG) -> bool:
    """Return ``True`` when ``hunter`` is decisively bigger than ``prey``."""

    return hunter.current_size > prey.current_size * config.size_advantage


def detect_consumption(
    state: world.GameState, config: GameConfig = DEFAULT_CONFIG
) -> ConsumptionEvents:
    """Return the food and snakes the controlled snake's head is touching.

    Only the controlled snake hunts; other snakes never eat each other or
    the player.
    """

    events = ConsumptionEvents()
    player = state.controlled
    if player is None or not player.segments:
        return events
    head = player.head
    radius = hit_radius(player, config)

    for item in state.food:
        if _within(head, item.position, radius):
            events.food_ids.append(item.id)

    for other in state.snakes:
        if other.id == player.id or not other.segments:
            continue
        if _within(head, other.head, radius) and can_eat(player, other, config):
            events.victim_ids.append(other.id)
    return events


def resolve_consumption(
    state: world.GameState, rng: random.Random, config: GameConfig = DEFAULT_CONFIG
) -> Tuple[world.GameState, ConsumptionEvents]:
    """Detect and apply every consumption event of the current frame.

    Each qualifying event is applied exactly once, food first, then prey.
    """

    events = detect_consumption(state, config)
    for food_id in events.food_ids:
        state = world.eat_food(state, food_id, rng, config)
    for victim_id in events.victim_ids:
        state = world.eat_snake(state, victim_id, config)
    return state, events
