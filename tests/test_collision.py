"""Tests for collision detection and consumption resolution."""

from dataclasses import replace

from walletsnake.collision import can_eat, detect_consumption, hit_radius, resolve_consumption
from walletsnake.food import Food
from walletsnake.utils import Point
from walletsnake.world import GameState

from conftest import make_snake


def make_state(snakes, food=(), selected="PLAYER"):
    return GameState(
        snakes=tuple(snakes),
        food=tuple(food),
        width=900.0,
        height=550.0,
        is_running=True,
        selected_id=selected,
        next_food_id=100,
    )


def far_food(count=3):
    return [Food(i, Point(800.0 - i * 10, 500.0), 10) for i in range(1, count + 1)]


def test_scenario_bigger_player_eats_equal_position_victim(rng):
    player = make_snake("PLAYER", head=(300.0, 300.0), size=40.0, is_player=True)
    victim = make_snake("VICTIM", head=(300.0, 300.0), size=30.0)
    bystander = make_snake("OTHER", head=(600.0, 100.0), size=10.0)
    state = make_state([player, victim, bystander], far_food())

    new_state, events = resolve_consumption(state, rng)

    assert events.victim_ids == ["VICTIM"]
    assert len(new_state.snakes) == 2
    assert new_state.score == state.score + 300
    assert new_state.controlled.bonus_size == player.bonus_size + 15
    assert [snake.id for snake in new_state.snakes] == ["PLAYER", "OTHER"]


def test_ten_percent_advantage_required(rng):
    player = make_snake("PLAYER", size=33.0, is_player=True)
    victim = make_snake("VICTIM", size=30.0)
    state = make_state([player, victim])
    assert not can_eat(player, victim)
    new_state, events = resolve_consumption(state, rng)
    assert not events
    assert new_state is state


def test_victim_outside_hit_radius_survives(rng):
    player = make_snake("PLAYER", head=(100.0, 100.0), size=40.0, is_player=True)
    victim = make_snake("VICTIM", head=(141.0, 100.0), size=10.0)
    state = make_state([player, victim])
    assert detect_consumption(state).victim_ids == []


def test_hit_radius_floor():
    assert hit_radius(make_snake(size=10.0)) == 25
    assert hit_radius(make_snake(size=30.0)) == 30


def test_food_eaten_and_replaced(rng):
    player = make_snake("PLAYER", head=(100.0, 100.0), is_player=True)
    food = [Food(1, Point(110.0, 100.0), 7)] + far_food()[1:]
    state = make_state([player], food)

    new_state, events = resolve_consumption(state, rng)

    assert events.food_ids == [1]
    assert len(new_state.food) == len(state.food)
    assert all(item.id != 1 for item in new_state.food)
    assert new_state.score == 7
    assert new_state.controlled.bonus_size == 3
    assert len(new_state.controlled.segments) == len(player.segments) + 2


def test_two_food_items_in_one_frame(rng):
    player = make_snake("PLAYER", head=(100.0, 100.0), is_player=True)
    food = [Food(1, Point(105.0, 100.0), 5), Food(2, Point(95.0, 100.0), 6), Food(3, Point(700.0, 400.0), 9)]
    state = make_state([player], food)

    new_state, events = resolve_consumption(state, rng)

    assert sorted(events.food_ids) == [1, 2]
    assert len(new_state.food) == 3
    assert new_state.score == 11
    assert new_state.controlled.bonus_size == 6


def test_food_and_prey_in_same_frame(rng):
    player = make_snake("PLAYER", head=(100.0, 100.0), size=30.0, is_player=True)
    victim = make_snake("VICTIM", head=(100.0, 100.0), size=12.0)
    food = [Food(1, Point(101.0, 100.0), 4)]
    state = make_state([player, victim], food)

    new_state, events = resolve_consumption(state, rng)

    assert events.food_ids == [1] and events.victim_ids == ["VICTIM"]
    assert new_state.score == 4 + 120
    assert new_state.controlled.bonus_size == 3 + 6
    assert len(new_state.food) == 1


def test_uncontrolled_snakes_never_eat(rng):
    player = make_snake("PLAYER", head=(700.0, 400.0), size=10.0, is_player=True)
    big = make_snake("BIG", head=(100.0, 100.0), size=40.0)
    small = make_snake("SMALL", head=(100.0, 100.0), size=9.0)
    state = make_state([player, big, small], [Food(1, Point(100.0, 100.0), 3)])
    new_state, events = resolve_consumption(state, rng)
    assert not events
    assert len(new_state.snakes) == 3


def test_player_never_eaten_by_bigger_snake(rng):
    player = make_snake("PLAYER", head=(100.0, 100.0), size=10.0, is_player=True)
    big = make_snake("BIG", head=(100.0, 100.0), size=40.0)
    new_state, _ = resolve_consumption(make_state([player, big]), rng)
    assert new_state.controlled is not None


def test_no_controlled_snake_means_no_events(rng):
    snake = make_snake("A")
    state = replace(make_state([snake], [Food(1, snake.head, 5)]), selected_id=None)
    assert not detect_consumption(state)
