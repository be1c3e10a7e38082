"""Game phase transitions.

rockPaperScissors -> roleSelection -> cardSelection -> (cardSelection | finished)

Tutorial games skip the first two phases with fixed roles. ``finished`` is
terminal until the game is reset.
"""

from __future__ import annotations

from typing import Dict, FrozenSet

from .types import GameMode, GamePhase

TRANSITIONS: Dict[GamePhase, FrozenSet[GamePhase]] = {
    GamePhase.ROCK_PAPER_SCISSORS: frozenset({GamePhase.ROCK_PAPER_SCISSORS, GamePhase.ROLE_SELECTION}),
    GamePhase.ROLE_SELECTION: frozenset({GamePhase.CARD_SELECTION}),
    GamePhase.CARD_SELECTION: frozenset({GamePhase.CARD_SELECTION, GamePhase.FINISHED}),
    GamePhase.FINISHED: frozenset(),
}


def initial_phase(mode: GameMode) -> GamePhase:
    return GamePhase.CARD_SELECTION if GameMode(mode) is GameMode.TUTORIAL else GamePhase.ROCK_PAPER_SCISSORS


def can_transition(current: GamePhase, target: GamePhase) -> bool:
    return target in TRANSITIONS[current]


def check_transition(current: GamePhase, target: GamePhase) -> GamePhase:
    """Return ``target`` if the move is allowed, raise ``ValueError`` otherwise."""

    if not can_transition(current, target):
        raise ValueError(f"Illegal phase transition {current.value} -> {target.value}")
    return target


def is_terminal(phase: GamePhase) -> bool:
    return phase is GamePhase.FINISHED
