"""Pygame based renderer for the game window."""

from __future__ import annotations

from typing import Iterable, List, Optional

import pygame

from walletsnake.food import Food
from walletsnake.growth import RENDER_CELL, render_size
from walletsnake.snake import Direction, Snake
from walletsnake.utils import iter_pairwise
from walletsnake.world import GameState


class Renderer:
    """Responsible for all drawing tasks."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self.label_font = pygame.font.SysFont("monospace", 10, bold=True)
        self.small_font = pygame.font.SysFont("monospace", 8)
        self.hud_font = pygame.font.SysFont("monospace", 14, bold=True)
        self.background_color = (0, 0, 0)
        self.grid_color = (17, 17, 17)
        self.border_color = (0, 255, 0)
        self.food_color = (255, 0, 0)
        self.food_glow = (255, 102, 102)
        self._colors: dict = {}

    def _color(self, hex_color: str) -> pygame.Color:
        color = self._colors.get(hex_color)
        if color is None:
            color = self._colors[hex_color] = pygame.Color(hex_color)
        return color

    def clear(self) -> None:
        self.screen.fill(self.background_color)

    def draw_grid(self, width: float, height: float) -> None:
        step = int(RENDER_CELL * 2)
        for x in range(0, int(width) + 1, step):
            pygame.draw.line(self.screen, self.grid_color, (x, 0), (x, height))
        for y in range(0, int(height) + 1, step):
            pygame.draw.line(self.screen, self.grid_color, (0, y), (width, y))
        pygame.draw.rect(self.screen, self.border_color, pygame.Rect(1, 1, width - 2, height - 2), width=3)

    def draw_food(self, food: Iterable[Food]) -> None:
        half = RENDER_CELL / 2
        for item in food:
            pygame.draw.rect(self.screen, self.food_color, pygame.Rect(item.x - half, item.y - half, RENDER_CELL, RENDER_CELL))
            pygame.draw.rect(self.screen, self.food_glow, pygame.Rect(item.x - half / 2, item.y - half / 2, half, half))

    def draw_snakes(self, snakes: Iterable[Snake], selected_id: Optional[str]) -> None:
        for snake in snakes:
            if snake.segments:
                self._draw_snake(snake, snake.id == selected_id)

    def _draw_snake(self, snake: Snake, selected: bool) -> None:
        color = self._color(snake.color)
        size = render_size(snake.current_size)
        # Skip links that span a wrap-around, they would cross the whole board.
        for leader, follower in iter_pairwise(snake.segments):
            if leader.distance_to(follower) < size * 2:
                pygame.draw.line(self.screen, color, leader.to_tuple(), follower.to_tuple(), max(1, int(size / 3)))
        for index in range(len(snake.segments) - 1, -1, -1):
            segment = snake.segments[index]
            edge = max(2.0, size - index * 0.5)
            pygame.draw.rect(self.screen, color, pygame.Rect(segment.x - edge / 2, segment.y - edge / 2, edge, edge))

        head = snake.head
        if selected:
            pygame.draw.rect(
                self.screen,
                self.border_color,
                pygame.Rect(head.x - size / 2 - 2, head.y - size / 2 - 2, size + 4, size + 4),
                width=2,
            )
        self._draw_eyes(snake, size)

        label = self.label_font.render(snake.symbol[:6], True, (255, 255, 255))
        self.screen.blit(label, (head.x - label.get_width() / 2, head.y - size / 2 - 6 - label.get_height()))
        change = snake.token.price_change
        change_color = (0, 255, 0) if change >= 0 else (255, 0, 0)
        text = f"{'+' if change >= 0 else ''}{change:.0f}%"
        pct = self.small_font.render(text, True, change_color)
        self.screen.blit(pct, (head.x - pct.get_width() / 2, head.y - size / 2 - 16 - pct.get_height()))

    def _draw_eyes(self, snake: Snake, size: float) -> None:
        head = snake.head
        eye = max(3.0, size / 6)
        offset = size / 4
        if snake.direction is Direction.DOWN:
            eyes = [(head.x - offset, head.y + offset), (head.x + offset, head.y + offset)]
        elif snake.direction is Direction.LEFT:
            eyes = [(head.x - offset, head.y - offset), (head.x - offset, head.y + offset)]
        elif snake.direction is Direction.RIGHT:
            eyes = [(head.x + offset, head.y - offset), (head.x + offset, head.y + offset)]
        else:
            eyes = [(head.x - offset, head.y - offset), (head.x + offset, head.y - offset)]
        for x, y in eyes:
            pygame.draw.rect(self.screen, (255, 255, 255), pygame.Rect(x - eye / 2, y - eye / 2, eye, eye))

    def draw_hud(self, state: GameState) -> None:
        score = self.hud_font.render(f"SCORE: {state.score}", True, self.border_color)
        self.screen.blit(score, (12, 12))
        if not state.is_running:
            text = "PAUSED" if state.snakes else "NO SNAKES"
            paused = self.hud_font.render(text, True, (255, 255, 0))
            self.screen.blit(paused, (self.screen.get_width() / 2 - paused.get_width() / 2, 12))

    def draw_standings(self, snakes: List[Snake], selected_id: Optional[str]) -> None:
        x = self.screen.get_width() - 160
        y = 12
        for index, snake in enumerate(snakes[:10]):
            marker = ">" if snake.id == selected_id else " "
            text = f"{marker}{index + 1}. {snake.symbol[:6]:<6} {snake.token.price_change:+.1f}%"
            surface = self.label_font.render(text, True, self._color(snake.color))
            self.screen.blit(surface, (x, y))
            y += 14

    def present(self) -> None:
        pygame.display.flip()
