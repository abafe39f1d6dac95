"""Stochastic steering for the snakes the player is not controlling."""

from __future__ import annotations

from dataclasses import replace
import random

from .config import DEFAULT_CONFIG, GameConfig
from .snake import Direction, Snake


def update_autonomous_direction(
    snake: Snake, rng: random.Random, config: GameConfig = DEFAULT_CONFIG
) -> Snake:
    """Occasionally turn ``snake`` to a random non-reversing direction.

    The decision is memoryless: each tick has the same ``turn_probability``
    of picking one of the three directions that do not reverse the snake.
    """

    if rng.random() >= config.turn_probability:
        return snake
    choices = [direction for direction in Direction if direction is not snake.direction.opposite]
    return replace(snake, direction=rng.choice(choices))
