"""Food entity definition."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import List

from .config import DEFAULT_CONFIG, GameConfig
from .utils import Point, random_point


@dataclass(frozen=True)
class Food:
    """A food item the controlled snake can eat for score and growth."""

    id: int
    position: Point
    value: int

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @classmethod
    def spawn_random(
        cls,
        food_id: int,
        width: float,
        height: float,
        rng: random.Random,
        config: GameConfig = DEFAULT_CONFIG,
    ) -> "Food":
        """Create a food item at a random position with a random value."""

        return cls(
            id=food_id,
            position=random_point(rng, width, height, config.spawn_margin),
            value=rng.randint(config.food_min_value, config.food_max_value),
        )

    def to_dict(self) -> dict:
        """Serialise the food item to a JSON friendly dictionary."""

        return {"id": self.id, "x": self.position.x, "y": self.position.y, "value": self.value}


def spawn_food(
    first_id: int,
    count: int,
    width: float,
    height: float,
    rng: random.Random,
    config: GameConfig = DEFAULT_CONFIG,
) -> List[Food]:
    """Spawn ``count`` food items with consecutive ids starting at ``first_id``."""

    return [Food.spawn_random(first_id + i, width, height, rng, config) for i in range(count)]
