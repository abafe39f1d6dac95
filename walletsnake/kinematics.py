"""Per-tick movement of a single snake."""

from __future__ import annotations

from dataclasses import replace
from typing import List

from .config import DEFAULT_CONFIG, GameConfig
from .snake import Snake
from .utils import Point, wrap_position


def effective_speed(snake: Snake) -> float:
    """Return the distance the head covers this tick; bigger snakes move faster."""

    return snake.speed * (snake.current_size / snake.base_size)


def relax_segment(leader: Point, follower: Point, target_distance: float) -> Point:
    """Pull ``follower`` towards ``leader`` by the slack beyond ``target_distance``.

    Coincident points (zero distance) leave the follower where it is.
    """

    offset = leader - follower
    distance = offset.length()
    if distance == 0 or distance <= target_distance:
        return follower
    return follower + offset * ((distance - target_distance) / distance)


def move_snake(
    snake: Snake, width: float, height: float, config: GameConfig = DEFAULT_CONFIG
) -> Snake:
    """Advance ``snake`` one step along its heading.

    Only the head wraps around the edges; the trailing segments follow the
    already-updated segment in front of them like an elastic chain whose
    rest length scales with the current size.
    """

    head = snake.head + snake.direction.vector * effective_speed(snake)
    head = wrap_position(head, width, height)

    target_distance = snake.current_size * config.segment_gap_ratio
    body: List[Point] = [head]
    for follower in snake.segments[1:]:
        body.append(relax_segment(body[-1], follower, target_distance))
    return replace(snake, segments=tuple(body))
