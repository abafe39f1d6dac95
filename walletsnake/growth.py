"""Price driven sizing and consumption growth."""

from __future__ import annotations

from dataclasses import replace
import logging
import math
from typing import Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .snake import Snake
from .tokens import percent_change, valid_price
from .utils import Point, is_finite_number

logger = logging.getLogger(__name__)

RENDER_CELL: float = 16.0
RENDER_SCALE: float = 0.8


def target_segment_count(size: float, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Return how many body segments a snake of ``size`` should carry."""

    return max(config.min_segment_count, int(math.floor(size / config.size_per_segment)))


def render_size(size: float) -> float:
    """Return the on-screen edge length of a segment for a snake of ``size``."""

    return max(RENDER_CELL, min(RENDER_CELL * 2, size * RENDER_SCALE))


def _extend_tail(segments: Tuple[Point, ...], count: int) -> Tuple[Point, ...]:
    if count <= 0:
        return segments
    return segments + (segments[-1],) * count


def resize_segments(segments: Tuple[Point, ...], count: int) -> Tuple[Point, ...]:
    """Grow or shrink ``segments`` at the tail so that it holds ``count`` points."""

    count = max(1, count)
    if len(segments) >= count:
        return segments[:count]
    return _extend_tail(segments, count - len(segments))


def apply_price_update(
    snake: Snake, new_percent_change: float, config: GameConfig = DEFAULT_CONFIG
) -> Snake:
    """Re-derive the size of ``snake`` from the token's percent price change.

    ``bonus_size`` is carried over untouched; the body is resized to match
    the new size.
    """

    if not is_finite_number(new_percent_change):
        logger.debug("Ignoring non-numeric price change %r for %s", new_percent_change, snake.id)
        return snake
    raw = snake.base_size + config.price_effect_coefficient * new_percent_change + snake.bonus_size
    size = config.clamp_size(raw)
    token = replace(snake.token, price_change=float(new_percent_change))
    segments = resize_segments(snake.segments, target_segment_count(size, config))
    return replace(snake, current_size=size, token=token, segments=segments)


def apply_price_quote(snake: Snake, price: object, config: GameConfig = DEFAULT_CONFIG) -> Snake:
    """Feed a fresh price quote for the snake's token into the growth model.

    Unusable quotes leave the snake exactly as it was.
    """

    quote = valid_price(price)
    if quote is None:
        logger.debug("Ignoring invalid price %r for %s", price, snake.id)
        return snake
    change = percent_change(quote, snake.token.price_at_start)
    updated = apply_price_update(snake, change, config)
    return replace(updated, token=updated.token.with_price(quote, change))


def _grow(snake: Snake, segments: int, bonus: float, config: GameConfig) -> Snake:
    return replace(
        snake,
        segments=_extend_tail(snake.segments, segments),
        bonus_size=snake.bonus_size + bonus,
        current_size=config.clamp_size(snake.current_size + bonus),
    )


def grow_from_food(snake: Snake, config: GameConfig = DEFAULT_CONFIG) -> Snake:
    """Apply the permanent growth earned by eating one food item."""

    return _grow(snake, config.food_growth_segments, config.food_bonus_size, config)


def grow_from_prey(snake: Snake, prey: Snake, config: GameConfig = DEFAULT_CONFIG) -> Snake:
    """Apply the permanent growth earned by eating ``prey``."""

    segments = min(config.prey_growth_segments, len(prey.segments))
    return _grow(snake, segments, math.floor(prey.current_size / 2), config)
