"""Roto Clash game package."""

from .types import (
    Difficulty,
    Direction,
    GameMode,
    GamePhase,
    GameState,
    Player,
    PlayerId,
    Position,
    Role,
    Rotation,
    RpsChoice,
)
from .board import BOARD_SIZE, CENTER, START_POSITIONS
from .engine import (
    MoveOutcome,
    TurnResult,
    choose_rps,
    execute_cards,
    initialize,
    is_terminal,
    reset,
    resolve_turn,
    select_card,
    select_role,
    winner,
)
from .agents import Agent, HeuristicAgent, RandomAgent, choose_ai_card
from .game_controller import GameController

__all__ = [
    "Agent",
    "BOARD_SIZE",
    "CENTER",
    "Difficulty",
    "Direction",
    "GameController",
    "GameMode",
    "GamePhase",
    "GameState",
    "HeuristicAgent",
    "MoveOutcome",
    "Player",
    "PlayerId",
    "Position",
    "RandomAgent",
    "Role",
    "Rotation",
    "RpsChoice",
    "START_POSITIONS",
    "TurnResult",
    "choose_ai_card",
    "choose_rps",
    "execute_cards",
    "initialize",
    "is_terminal",
    "reset",
    "resolve_turn",
    "select_card",
    "select_role",
    "winner",
]
