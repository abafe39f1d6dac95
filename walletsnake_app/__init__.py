"""Pygame host and external data sources for the wallet snake game."""

__all__ = [
    "errors",
    "input",
    "leaderboard",
    "main",
    "prices",
    "render",
    "wallet",
]
