"""
Settings and game history persistence.

Both records are pydantic models written as camelCase JSON. Stores never raise
on an unreadable file: they log a warning and fall back to defaults, so a
corrupt history never blocks starting a game.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .types import Difficulty, GameMode

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GameHistoryEntry(_Record):
    """A finished game."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    date: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    game_mode: GameMode
    winner: str
    turn_count: int = Field(ge=0)
    duration: int = Field(ge=0)  # seconds


class GameSettings(_Record):
    sound_enabled: bool = True
    music_enabled: bool = True
    theme: Literal["light", "dark"] = "light"
    difficulty: Difficulty = Difficulty.MEDIUM
    time_limit: Optional[float] = None  # stored only, never enforced


DEFAULT_SETTINGS = GameSettings()

_HISTORY_ADAPTER = TypeAdapter(List[GameHistoryEntry])


@dataclass
class HistoryStats:
    total_games: int
    wins: int
    ai_wins: int
    local_wins: int
    win_rate: int
    average_turns: int
    average_duration: int


def _round(value: float) -> int:
    return int(value + 0.5)


def compute_stats(history: List[GameHistoryEntry]) -> HistoryStats:
    """Summarize a history list; "wins" counts games won by Player 1."""

    total = len(history)
    wins = sum(1 for game in history if game.winner == "Player 1")
    ai_wins = sum(1 for game in history if game.winner == "AI")
    local_wins = sum(
        1 for game in history if game.game_mode is GameMode.LOCAL and game.winner in ("Player 1", "Player 2")
    )
    if total == 0:
        return HistoryStats(0, 0, 0, 0, 0, 0, 0)
    return HistoryStats(
        total_games=total,
        wins=wins,
        ai_wins=ai_wins,
        local_wins=local_wins,
        win_rate=_round(wins / total * 100),
        average_turns=_round(sum(g.turn_count for g in history) / total),
        average_duration=_round(sum(g.duration for g in history) / total),
    )


class JsonHistoryStore:
    """
    Most-recent-first game history in a single JSON file.

    Only the newest ``limit`` games are kept.
    """

    def __init__(self, path: Path | str, limit: int = HISTORY_LIMIT):
        self.path = Path(path)
        self.limit = limit

    def load(self) -> List[GameHistoryEntry]:
        if not self.path.exists():
            return []
        try:
            return _HISTORY_ADAPTER.validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError, ValueError) as e:
            logger.warning(f"Failed to parse game history {self.path}: {e}")
            return []

    def _write(self, history: List[GameHistoryEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = _HISTORY_ADAPTER.dump_json(history, by_alias=True, indent=2)
        self.path.write_bytes(payload)

    def save_game(self, entry: GameHistoryEntry) -> List[GameHistoryEntry]:
        """Prepend ``entry`` and persist; returns the updated history."""

        history = [entry, *self.load()][: self.limit]
        self._write(history)
        logger.debug(f"Saved game {entry.id} ({entry.winner} in {entry.turn_count} turns)")
        return history

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def stats(self) -> HistoryStats:
        return compute_stats(self.load())


class JsonSettingsStore:
    """Settings file merged over ``DEFAULT_SETTINGS`` on load."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> GameSettings:
        if not self.path.exists():
            return DEFAULT_SETTINGS.model_copy()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("settings must be a JSON object")
            merged = {**DEFAULT_SETTINGS.model_dump(by_alias=True), **data}
            return GameSettings.model_validate(merged)
        except (OSError, ValidationError, ValueError) as e:
            logger.warning(f"Failed to parse game settings {self.path}: {e}")
            return DEFAULT_SETTINGS.model_copy()

    def save(self, settings: GameSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(settings.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

    def update(self, **changes) -> GameSettings:
        """Apply field changes (snake_case names) and persist the result."""

        current = self.load().model_dump()
        current.update(changes)
        settings = GameSettings.model_validate(current)
        self.save(settings)
        return settings

    def reset(self) -> GameSettings:
        settings = DEFAULT_SETTINGS.model_copy()
        self.save(settings)
        return settings
