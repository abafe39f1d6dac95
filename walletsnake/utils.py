"""Geometry and randomness primitives used by the simulation core."""

from __future__ import annotations

from dataclasses import dataclass
import math
import random
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class Point:
    """An immutable point on the continuous simulation plane.

    The class implements the handful of vector operations needed to move
    the snakes: addition, subtraction, scaling and distance computations.
    Instances are frozen so a published world snapshot can never be edited
    in place.
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def length(self) -> float:
        """Return the Euclidean length of the vector."""

        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Return the distance between this point and ``other``."""

        return (self - other).length()

    def to_tuple(self) -> Tuple[float, float]:
        """Return the point as an ``(x, y)`` tuple."""

        return self.x, self.y


def wrap_position(position: Point, width: float, height: float) -> Point:
    """Wrap ``position`` onto the opposite edge when it leaves the bounds.

    The plane is toroidal: leaving past the right edge re-enters at ``x = 0``
    and leaving past the left edge re-enters at ``x = width`` (same for y).
    """

    x, y = position.x, position.y
    if x < 0:
        x = width
    elif x > width:
        x = 0.0
    if y < 0:
        y = height
    elif y > height:
        y = 0.0
    if x == position.x and y == position.y:
        return position
    return Point(x, y)


def random_point(rng: random.Random, width: float, height: float, margin: float = 0.0) -> Point:
    """Return a uniformly random point inset by ``margin`` from the bounds.

    The margin shrinks to half the bound on an axis too small to honour it,
    so the point always lies inside ``[0, width] x [0, height]``.
    """

    margin_x = min(margin, width / 2)
    margin_y = min(margin, height / 2)
    x = margin_x + rng.random() * (width - 2 * margin_x)
    y = margin_y + rng.random() * (height - 2 * margin_y)
    return Point(x, y)


def is_finite_number(value: object) -> bool:
    """Return ``True`` when ``value`` is a real, finite number (bools excluded)."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def iter_pairwise(iterable: Iterable[Point]) -> Iterator[Tuple[Point, Point]]:
    """Yield pairwise elements from ``iterable`` as ``(current, next)`` tuples."""

    iterator = iter(iterable)
    previous = next(iterator, None)
    for item in iterator:
        if previous is not None:
            yield previous, item
        previous = item
