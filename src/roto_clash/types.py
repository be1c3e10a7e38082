"""Core data structures for Roto Clash.

Rule reminders:
- Board is 5x5 with coordinates (x, y) from top-left; cells are indexed ``board[y][x]``.
- Player 1 starts at (0,4), Player 2 at (4,0); the center (2,2) wins.
- Each turn one player is the mover and the other the rotator; roles swap every turn.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple


class Position(NamedTuple):
    x: int
    y: int


class PlayerId(str, Enum):
    """Players in the game."""

    PLAYER1 = "player1"
    PLAYER2 = "player2"

    def opponent(self) -> "PlayerId":
        """Return the opposing player."""

        return PlayerId.PLAYER1 if self is PlayerId.PLAYER2 else PlayerId.PLAYER2


class Role(str, Enum):
    MOVER = "mover"
    ROTATOR = "rotator"


class Direction(str, Enum):
    """Cardinal direction cards, iterated in evaluation order."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class Rotation(str, Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


class RpsChoice(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class GameMode(str, Enum):
    AI = "ai"
    LOCAL = "local"
    TUTORIAL = "tutorial"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GamePhase(str, Enum):
    ROCK_PAPER_SCISSORS = "rockPaperScissors"
    ROLE_SELECTION = "roleSelection"
    CARD_SELECTION = "cardSelection"
    FINISHED = "finished"


Board = Tuple[Tuple[Optional[PlayerId], ...], ...]


@dataclass(frozen=True)
class Player:
    id: PlayerId
    name: str
    position: Position
    is_ai: bool = False


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game.

    Every engine operation returns a new snapshot; the dict fields are never
    mutated after construction. ``selected_cards`` maps a player to the raw card
    id they submitted for the current turn, ``rps_choices`` to their pending
    rock-paper-scissors choice.
    """

    board: Board
    players: Tuple[Player, Player]
    compass: int
    mover: PlayerId
    rotator: PlayerId
    phase: GamePhase
    game_mode: GameMode
    difficulty: Difficulty
    winner: Optional[PlayerId] = None
    turn_count: int = 0
    selected_cards: Dict[PlayerId, str] = field(default_factory=dict)
    rps_choices: Dict[PlayerId, RpsChoice] = field(default_factory=dict)
    rps_winner: Optional[PlayerId] = None

    def player(self, player_id: PlayerId) -> Player:
        for candidate in self.players:
            if candidate.id is player_id:
                return candidate
        raise KeyError(player_id)

    def position_of(self, player_id: PlayerId) -> Position:
        return self.player(player_id).position

    def role_of(self, player_id: PlayerId) -> Role:
        return Role.MOVER if self.mover is player_id else Role.ROTATOR

    def ai_player(self) -> Optional[PlayerId]:
        """Return the id of the AI-controlled player, if any."""

        for candidate in self.players:
            if candidate.is_ai:
                return candidate.id
        return None

    def with_player(self, updated: Player) -> "GameState":
        players = tuple(updated if p.id is updated.id else p for p in self.players)
        return replace(self, players=players)  # type: ignore[arg-type]
