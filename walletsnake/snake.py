"""Snake entity definition and the entity factory."""

from __future__ import annotations

from dataclasses import dataclass, replace
import enum
import random
from typing import Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .tokens import PricedToken
from .utils import Point, random_point


class Direction(enum.Enum):
    """Cardinal heading of a snake. Screen coordinates, y grows downwards."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self) -> Point:
        return _VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_VECTORS = {
    Direction.UP: Point(0.0, -1.0),
    Direction.DOWN: Point(0.0, 1.0),
    Direction.LEFT: Point(-1.0, 0.0),
    Direction.RIGHT: Point(1.0, 0.0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Snake:
    """A simulated creature bound to one wallet token.

    ``segments`` is ordered head first; the index of a segment defines how
    far it trails behind the head.
    """

    id: str
    token: PricedToken
    segments: Tuple[Point, ...]
    direction: Direction
    speed: float
    base_size: float
    current_size: float
    color: str
    bonus_size: float = 0.0
    is_player: bool = False

    @property
    def head(self) -> Point:
        return self.segments[0]

    @property
    def symbol(self) -> str:
        return self.token.symbol

    def to_snapshot(self) -> dict:
        """Return a snapshot representation for rendering and dumps."""

        return {
            "id": self.id,
            "symbol": self.token.symbol,
            "color": self.color,
            "direction": self.direction.value,
            "speed": self.speed,
            "baseSize": self.base_size,
            "currentSize": self.current_size,
            "bonusSize": self.bonus_size,
            "isPlayer": self.is_player,
            "token": self.token.to_dict(),
            "segments": [{"x": point.x, "y": point.y} for point in self.segments],
        }


def create_snake(
    token: PricedToken,
    width: float,
    height: float,
    index: int,
    is_player: bool = False,
    *,
    rng: random.Random,
    config: GameConfig = DEFAULT_CONFIG,
) -> Snake:
    """Build a fresh snake for ``token``.

    The head spawns uniformly inside the bounds inset by the spawn margin,
    heading in a random cardinal direction. The body starts as a straight
    line laid out behind the head.
    """

    head = random_point(rng, width, height, config.spawn_margin)
    direction = rng.choice(list(Direction))
    gap = config.base_size * config.segment_gap_ratio
    behind = direction.opposite.vector
    segments = tuple(head + behind * (gap * i) for i in range(config.initial_segment_count))
    return Snake(
        id=token.token_id,
        token=token,
        segments=segments,
        direction=direction,
        speed=config.base_speed,
        base_size=config.base_size,
        current_size=config.base_size,
        color=config.color_for(index),
        is_player=is_player,
    )


def change_direction(snake: Snake, direction: Direction) -> Snake:
    """Turn ``snake`` towards ``direction`` unless it would reverse onto itself."""

    if direction is snake.direction.opposite or direction is snake.direction:
        return snake
    return replace(snake, direction=direction)
