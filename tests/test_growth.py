"""Tests for price driven sizing and consumption growth."""

import math

import pytest

from walletsnake.config import GameConfig
from walletsnake.growth import (
    apply_price_quote,
    apply_price_update,
    grow_from_food,
    grow_from_prey,
    render_size,
    resize_segments,
    target_segment_count,
)
from walletsnake.utils import Point

from conftest import make_snake


def test_twenty_percent_gain_grows_to_21():
    snake = make_snake()
    grown = apply_price_update(snake, 20.0)
    assert grown.current_size == pytest.approx(21.0)
    assert grown.token.price_change == 20.0
    assert grown.bonus_size == 0


def test_size_clamped_both_ways():
    snake = make_snake()
    assert apply_price_update(snake, 1000.0).current_size == 40
    assert apply_price_update(snake, -1000.0).current_size == 8


def test_bonus_survives_price_update():
    snake = make_snake(bonus=6.0)
    updated = apply_price_update(snake, 0.0)
    assert updated.bonus_size == 6.0
    assert updated.current_size == 21.0


def test_coefficient_is_configurable():
    config = GameConfig(price_effect_coefficient=0.5)
    assert apply_price_update(make_snake(), 10.0, config).current_size == 20.0


def test_non_numeric_change_ignored():
    snake = make_snake()
    assert apply_price_update(snake, math.nan) is snake


def test_segments_follow_size():
    snake = make_snake()
    assert len(apply_price_update(snake, 100.0).segments) == 13
    assert len(apply_price_update(snake, -100.0).segments) == 3


def test_price_quote_updates_token():
    snake = make_snake()
    quoted = apply_price_quote(snake, 1.2)
    assert quoted.token.price == 1.2
    assert quoted.token.price_change == pytest.approx(20.0)
    assert quoted.current_size == pytest.approx(21.0)


@pytest.mark.parametrize("price", [0, -1.0, "abc", None, math.inf, True])
def test_unusable_quote_is_no_update(price):
    snake = make_snake()
    assert apply_price_quote(snake, price) is snake


def test_food_growth():
    snake = make_snake()
    fed = grow_from_food(snake)
    assert len(fed.segments) == len(snake.segments) + 2
    assert fed.segments[-1] == fed.segments[-2] == snake.segments[-1]
    assert fed.bonus_size == 3
    assert fed.current_size == 18


def test_food_growth_respects_max_size():
    snake = make_snake(size=39.0)
    fed = grow_from_food(snake)
    assert fed.current_size == 40
    assert fed.bonus_size == 3


def test_prey_growth_bounded_by_prey_segments():
    hunter = make_snake(size=40.0)
    prey = make_snake("PREY", size=30.0, segments=(Point(0, 0), Point(1, 0)))
    fed = grow_from_prey(hunter, prey)
    assert len(fed.segments) == len(hunter.segments) + 2
    assert fed.bonus_size == 15


def test_prey_growth_caps_at_five_segments():
    hunter = make_snake(size=20.0)
    prey = make_snake("PREY", size=17.0, segments=tuple(Point(i, 0) for i in range(9)))
    fed = grow_from_prey(hunter, prey)
    assert len(fed.segments) == len(hunter.segments) + 5
    assert fed.bonus_size == 8
    assert fed.current_size == 28


def test_target_segment_count():
    assert target_segment_count(15) == 5
    assert target_segment_count(8) == 3
    assert target_segment_count(40) == 13


def test_resize_segments():
    points = tuple(Point(i, 0) for i in range(5))
    assert resize_segments(points, 3) == points[:3]
    assert resize_segments(points, 7) == points + (points[-1], points[-1])


def test_render_size_bounds():
    assert render_size(8) == 16
    assert render_size(30) == 24
    assert render_size(40) == 32
