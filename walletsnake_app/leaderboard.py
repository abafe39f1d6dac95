"""Score persistence: submit a finished game and read back the top scores."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
import logging
from pathlib import Path
import threading
from typing import Iterable, List, Optional, Protocol

from walletsnake.world import GameState

from .errors import LeaderboardError
from .wallet import short_address

logger = logging.getLogger(__name__)

TOP_LIMIT = 50
DEFAULT_TOP_SYMBOL = "SOL"


@dataclass(frozen=True)
class ScoreEntry:
    identity: str
    identity_short: str
    score: int
    entity_count: int
    top_symbol: str

    @classmethod
    def from_dict(cls, payload: dict) -> "ScoreEntry":
        identity = str(payload["identity"])
        return cls(
            identity=identity,
            identity_short=str(payload.get("identity_short") or short_address(identity)),
            score=int(payload["score"]),
            entity_count=int(payload.get("entity_count") or 1),
            top_symbol=str(payload.get("top_symbol") or DEFAULT_TOP_SYMBOL),
        )


def score_entry_for(state: GameState, identity: str) -> ScoreEntry:
    """Build the leaderboard tuple describing the game in ``state``."""

    player = state.controlled
    return ScoreEntry(
        identity=identity,
        identity_short=short_address(identity),
        score=state.score,
        entity_count=max(1, len(state.snakes)),
        top_symbol=player.symbol if player is not None else DEFAULT_TOP_SYMBOL,
    )


def rank(entries: Iterable[ScoreEntry], limit: int = TOP_LIMIT) -> List[ScoreEntry]:
    """Return the best ``limit`` entries, highest score first."""

    return sorted(entries, key=lambda entry: entry.score, reverse=True)[:limit]


class Leaderboard(Protocol):
    def submit(self, entry: ScoreEntry) -> List[ScoreEntry]:
        ...

    def top(self, limit: int = TOP_LIMIT) -> List[ScoreEntry]:
        ...


class InMemoryLeaderboard:
    """Leaderboard kept in process memory for the lifetime of the game."""

    def __init__(self, entries: Optional[Iterable[ScoreEntry]] = None) -> None:
        self._entries: List[ScoreEntry] = list(entries or [])
        self._lock = threading.Lock()

    def submit(self, entry: ScoreEntry) -> List[ScoreEntry]:
        if entry.score < 0:
            raise LeaderboardError("Score must not be negative")
        with self._lock:
            self._entries.append(entry)
            return rank(self._entries)

    def top(self, limit: int = TOP_LIMIT) -> List[ScoreEntry]:
        with self._lock:
            return rank(self._entries, limit)


class JsonFileLeaderboard:
    """Leaderboard persisted as a JSON list on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> List[ScoreEntry]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [ScoreEntry.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise LeaderboardError(f"Failed to fetch leaderboard from {self.path}") from exc

    def _save(self, entries: List[ScoreEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps([asdict(entry) for entry in entries], indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise LeaderboardError(f"Failed to submit score to {self.path}") from exc

    def submit(self, entry: ScoreEntry) -> List[ScoreEntry]:
        if entry.score < 0:
            raise LeaderboardError("Score must not be negative")
        with self._lock:
            entries = self._load()
            entries.append(entry)
            self._save(entries)
            logger.info("Recorded score %d for %s", entry.score, entry.identity_short)
            return rank(entries)

    def top(self, limit: int = TOP_LIMIT) -> List[ScoreEntry]:
        with self._lock:
            return rank(self._load(), limit)
