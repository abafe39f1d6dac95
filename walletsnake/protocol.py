"""JSON encoding of world snapshots."""

from __future__ import annotations

import json
from typing import Any, Dict

from .world import GameState


def snapshot_dict(state: GameState) -> Dict[str, Any]:
    """Return ``state`` as a JSON friendly dictionary."""

    return {
        "type": "snapshot",
        "tick": state.tick,
        "width": state.width,
        "height": state.height,
        "isRunning": state.is_running,
        "selectedId": state.selected_id,
        "score": state.score,
        "snakes": [snake.to_snapshot() for snake in state.snakes],
        "food": [item.to_dict() for item in state.food],
    }


def encode_snapshot(state: GameState) -> str:
    """Encode a world snapshot as a JSON document."""

    return json.dumps(snapshot_dict(state))
