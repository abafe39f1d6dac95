"""Tests for the single-writer world store."""

from dataclasses import replace
import random
import threading

from walletsnake import world
from walletsnake.food import Food
from walletsnake.snake import Direction
from walletsnake.store import WorldStore


def make_store(tokens, seed=42):
    rng = random.Random(seed)
    return WorldStore(world.initialize_game(tokens, 900, 550, rng=rng), rng=rng)


def test_tick_publishes_new_generation(tokens):
    store = make_store(tokens)
    before = store.state
    after = store.tick()
    assert store.state is after
    assert after is not before
    assert store.generation == 1


def test_noop_update_keeps_generation(tokens):
    store = make_store(tokens)
    store.stop()
    generation = store.generation
    store.tick()
    assert store.generation == generation


def test_rejected_reverse_keeps_generation(tokens):
    store = make_store(tokens)
    reverse = store.state.controlled.direction.opposite
    assert store.steer(reverse) is store.state
    assert store.generation == 0


def test_select_and_prices(tokens):
    store = make_store(tokens)
    store.select(tokens[1].token_id)
    assert store.state.selected_id == tokens[1].token_id
    store.apply_prices({tokens[1].token_id: tokens[1].price * 1.2})
    assert store.state.controlled.current_size > 15


def test_same_seed_replays_identically(tokens):
    a = make_store(tokens, seed=9)
    b = make_store(tokens, seed=9)
    for _ in range(100):
        a.tick()
        a.consume()
        b.tick()
        b.consume()
    assert a.state == b.state


def test_concurrent_writers_never_tear_state(tokens):
    store = make_store(tokens)
    directions = [Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT]

    def ticker():
        for _ in range(300):
            store.tick()

    def steerer():
        for i in range(300):
            store.steer(directions[i % 4])

    def pricer():
        for i in range(300):
            store.apply_prices({token.token_id: token.price * (1 + (i % 7) / 10) for token in tokens})

    threads = [threading.Thread(target=fn) for fn in (ticker, steerer, pricer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.state.tick == 300
    assert len(store.state.snakes) == 3
    assert sum(snake.is_player for snake in store.state.snakes) == 1


def test_consume_publishes_once_per_meal(tokens):
    store = make_store(tokens)
    head = store.state.controlled.head
    store.update(lambda state: replace(state, snakes=state.snakes[:1], food=(Food(id=99, position=head, value=5),)))
    generation = store.generation

    state, events = store.consume()

    assert events.food_ids == [99]
    assert state is store.state
    assert store.generation == generation + 1
    assert state.score == 5


def test_consume_without_contact_keeps_generation(tokens):
    store = make_store(tokens)
    store.update(lambda state: replace(state, snakes=state.snakes[:1], food=()))
    generation = store.generation

    state, events = store.consume()

    assert not events
    assert state is store.state
    assert store.generation == generation
