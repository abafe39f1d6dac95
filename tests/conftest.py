import random

import pytest

from walletsnake.config import GameConfig
from walletsnake.snake import Direction, Snake
from walletsnake.tokens import PricedToken
from walletsnake.utils import Point


def make_token(token_id="MINT", symbol="TOK", price=1.0):
    return PricedToken(
        token_id=token_id,
        symbol=symbol,
        name=f"{symbol} token",
        balance=10.0,
        price=price,
        price_at_start=price,
    )


def make_snake(
    token_id="MINT",
    head=(100.0, 100.0),
    direction=Direction.RIGHT,
    size=15.0,
    segments=None,
    bonus=0.0,
    is_player=False,
):
    if segments is None:
        segments = tuple(Point(head[0] - 12.0 * i, head[1]) for i in range(5))
    return Snake(
        id=token_id,
        token=make_token(token_id, token_id[:4]),
        segments=tuple(segments),
        direction=direction,
        speed=2.0,
        base_size=15.0,
        current_size=size,
        color="#FF6B6B",
        bonus_size=bonus,
        is_player=is_player,
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def tokens():
    return [make_token(f"MINT{i}", f"T{i}", price=1.0 + i) for i in range(3)]
