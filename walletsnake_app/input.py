"""Translate keyboard input into commands for the world store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame

from walletsnake.snake import Direction

DIRECTION_KEYS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

SELECT_KEYS = {getattr(pygame, f"K_{digit}"): digit - 1 for digit in range(1, 10)}


@dataclass
class Command:
    """One player request decoded from a key press."""

    direction: Optional[Direction] = None
    select_index: Optional[int] = None
    cycle: int = 0
    toggle_pause: bool = False
    toggle_standings: bool = False
    quit: bool = False


class InputManager:
    """Map pygame key codes onto :class:`Command` objects."""

    def handle_key(self, key: int, shift: bool = False) -> Command:
        if key in DIRECTION_KEYS:
            return Command(direction=DIRECTION_KEYS[key])
        if key in SELECT_KEYS:
            return Command(select_index=SELECT_KEYS[key])
        if key == pygame.K_TAB:
            return Command(cycle=-1 if shift else 1)
        if key == pygame.K_p:
            return Command(toggle_pause=True)
        if key == pygame.K_l:
            return Command(toggle_standings=True)
        if key == pygame.K_ESCAPE:
            return Command(quit=True)
        return Command()
