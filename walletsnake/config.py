"""Gameplay tuning shared across the simulation modules."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

BASE_SNAKE_SIZE: float = 15.0
MIN_SNAKE_SIZE: float = 8.0
MAX_SNAKE_SIZE: float = 40.0
BASE_SPEED: float = 2.0
SEGMENT_GAP_RATIO: float = 0.8
INITIAL_SEGMENT_COUNT: int = 5
MIN_SEGMENT_COUNT: int = 3
SIZE_PER_SEGMENT: float = 3.0
SPAWN_MARGIN: float = 50.0
PRICE_EFFECT_COEFFICIENT: float = 0.3
TURN_PROBABILITY: float = 0.02
HIT_RADIUS_FLOOR: float = 25.0
SIZE_ADVANTAGE: float = 1.1
FOOD_GROWTH_SEGMENTS: int = 2
FOOD_BONUS_SIZE: int = 3
PREY_GROWTH_SEGMENTS: int = 5
PREY_SCORE_MULTIPLIER: int = 10
FOOD_COUNT: int = 20
FOOD_MIN_VALUE: int = 5
FOOD_MAX_VALUE: int = 15
MAX_SNAKES: int = 10
CANVAS_WIDTH: int = 900
CANVAS_HEIGHT: int = 550
TICK_RATE: int = 60
PRICE_REFRESH_SECONDS: float = 5.0

SNAKE_COLORS: Tuple[str, ...] = (
    "#FF6B6B",  # red
    "#4ECDC4",  # teal
    "#45B7D1",  # blue
    "#96CEB4",  # green
    "#FFEAA7",  # yellow
    "#DDA0DD",  # plum
    "#98D8C8",  # mint
    "#F7DC6F",  # gold
    "#BB8FCE",  # purple
    "#85C1E9",  # light blue
)


@dataclass(frozen=True)
class GameConfig:
    """Immutable bundle of every tunable used by the simulation.

    A config is handed explicitly to the factory, the growth model and the
    world functions, so two simulations running side by side never share
    mutable module state.
    """

    base_size: float = BASE_SNAKE_SIZE
    min_size: float = MIN_SNAKE_SIZE
    max_size: float = MAX_SNAKE_SIZE
    base_speed: float = BASE_SPEED
    segment_gap_ratio: float = SEGMENT_GAP_RATIO
    initial_segment_count: int = INITIAL_SEGMENT_COUNT
    min_segment_count: int = MIN_SEGMENT_COUNT
    size_per_segment: float = SIZE_PER_SEGMENT
    spawn_margin: float = SPAWN_MARGIN
    price_effect_coefficient: float = PRICE_EFFECT_COEFFICIENT
    turn_probability: float = TURN_PROBABILITY
    hit_radius_floor: float = HIT_RADIUS_FLOOR
    size_advantage: float = SIZE_ADVANTAGE
    food_growth_segments: int = FOOD_GROWTH_SEGMENTS
    food_bonus_size: int = FOOD_BONUS_SIZE
    prey_growth_segments: int = PREY_GROWTH_SEGMENTS
    prey_score_multiplier: int = PREY_SCORE_MULTIPLIER
    food_count: int = FOOD_COUNT
    food_min_value: int = FOOD_MIN_VALUE
    food_max_value: int = FOOD_MAX_VALUE
    max_snakes: int = MAX_SNAKES
    palette: Tuple[str, ...] = SNAKE_COLORS

    def __post_init__(self) -> None:
        if self.base_size <= 0:
            raise ValueError("base_size must be positive")
        if self.min_size > self.max_size:
            raise ValueError("min_size must not exceed max_size")
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        if not 0.0 <= self.turn_probability <= 1.0:
            raise ValueError("turn_probability must be within [0, 1]")
        if self.initial_segment_count < 1:
            raise ValueError("initial_segment_count must be at least 1")
        if self.food_min_value > self.food_max_value:
            raise ValueError("food_min_value must not exceed food_max_value")

    def with_overrides(self, **overrides) -> "GameConfig":
        """Return a validated copy with ``overrides`` applied."""

        return replace(self, **overrides)

    def clamp_size(self, size: float) -> float:
        """Clamp ``size`` into ``[min_size, max_size]``."""

        return max(self.min_size, min(self.max_size, size))

    def color_for(self, index: int) -> str:
        """Return the palette color for the ``index``-th created snake."""

        return self.palette[index % len(self.palette)]


DEFAULT_CONFIG = GameConfig()
