"""Simulation core for the wallet snake game."""

__all__ = [
    "autonomy",
    "collision",
    "config",
    "food",
    "growth",
    "kinematics",
    "protocol",
    "snake",
    "store",
    "tokens",
    "utils",
    "world",
]
