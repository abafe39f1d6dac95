"""Tests for the immutable game configuration."""

import dataclasses

import pytest

from walletsnake.config import DEFAULT_CONFIG, GameConfig, SNAKE_COLORS


def test_defaults_match_reference_tuning():
    assert DEFAULT_CONFIG.base_size == 15
    assert DEFAULT_CONFIG.min_size == 8
    assert DEFAULT_CONFIG.max_size == 40
    assert DEFAULT_CONFIG.segment_gap_ratio == 0.8
    assert len(DEFAULT_CONFIG.palette) == 10


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.base_size = 20  # type: ignore[misc]


def test_with_overrides_returns_copy():
    tuned = DEFAULT_CONFIG.with_overrides(price_effect_coefficient=0.5)
    assert tuned.price_effect_coefficient == 0.5
    assert DEFAULT_CONFIG.price_effect_coefficient == 0.3


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_size": 50},
        {"base_size": 0},
        {"palette": ()},
        {"turn_probability": 1.5},
        {"food_min_value": 20, "food_max_value": 10},
    ],
)
def test_invalid_overrides_rejected(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides)


def test_color_for_repeats_after_palette():
    assert DEFAULT_CONFIG.color_for(0) == SNAKE_COLORS[0]
    assert DEFAULT_CONFIG.color_for(10) == SNAKE_COLORS[0]
    assert DEFAULT_CONFIG.color_for(13) == SNAKE_COLORS[3]


def test_clamp_size():
    assert DEFAULT_CONFIG.clamp_size(1) == 8
    assert DEFAULT_CONFIG.clamp_size(100) == 40
    assert DEFAULT_CONFIG.clamp_size(21) == 21
