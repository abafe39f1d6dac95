"""Tests for world snapshot encoding."""

import json

from walletsnake import world
from walletsnake.protocol import encode_snapshot


def test_snapshot_contents(tokens, rng):
    state = world.initialize_game(tokens, 900, 550, rng=rng)
    payload = json.loads(encode_snapshot(state))
    assert payload["type"] == "snapshot"
    assert payload["selectedId"] == tokens[0].token_id
    assert len(payload["snakes"]) == 3
    assert len(payload["food"]) == len(state.food)
    snake = payload["snakes"][0]
    assert snake["direction"] in {"UP", "DOWN", "LEFT", "RIGHT"}
    assert snake["isPlayer"] is True
    assert len(snake["segments"]) == 5
    assert snake["token"]["symbol"] == tokens[0].symbol


def test_empty_world_snapshot():
    payload = json.loads(encode_snapshot(world.empty_world()))
    assert payload["snakes"] == [] and payload["food"] == []
    assert payload["selectedId"] is None
