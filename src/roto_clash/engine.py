"""Game engine for Roto Clash.

Rules:
- Board is 5x5; Player 1 starts at (0,4), Player 2 at (4,0). Reaching (2,2) wins.
- Each turn the mover submits a direction card and the rotator a rotation card.
- The rotation is always applied first; the direction card is read under the
  rotated compass.
- A step off the board or onto the other player is dropped, but the turn still
  completes and roles swap.

Every function takes a ``GameState`` snapshot and returns a new one.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from . import board, compass, phases, rps
from .cards import as_direction, as_rotation
from .types import (
    Difficulty,
    GameMode,
    GamePhase,
    GameState,
    Player,
    PlayerId,
    Position,
    Role,
    RpsChoice,
)


class MoveOutcome(str, Enum):
    """What happened to the mover's card during execution."""

    APPLIED = "applied"
    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED = "occupied"
    NO_DIRECTION = "no_direction"


@dataclass(frozen=True)
class TurnResult:
    state: GameState
    executed: bool
    outcome: Optional[MoveOutcome] = None
    rotated: bool = False
    destination: Optional[Position] = None


def _initial_players(mode: GameMode) -> Tuple[Player, Player]:
    is_ai = mode is GameMode.AI
    return (
        Player(PlayerId.PLAYER1, "Player 1", board.START_POSITIONS[PlayerId.PLAYER1]),
        Player(
            PlayerId.PLAYER2,
            "AI" if is_ai else "Player 2",
            board.START_POSITIONS[PlayerId.PLAYER2],
            is_ai=is_ai,
        ),
    )


def initialize(
    mode: GameMode,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Create a new game.

    The compass starts on a uniformly drawn direction. Tutorial games start in
    card selection with Player 1 moving; other modes start with rock-paper-scissors.
    """

    mode = GameMode(mode)
    return GameState(
        board=board.new_board(),
        players=_initial_players(mode),
        compass=compass.random_direction(rng),
        mover=PlayerId.PLAYER1,
        rotator=PlayerId.PLAYER2,
        phase=phases.initial_phase(mode),
        game_mode=mode,
        difficulty=Difficulty(difficulty),
    )


def reset(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Start over with the same mode and difficulty."""

    return initialize(state.game_mode, state.difficulty, rng)


def select_card(state: GameState, player_id: PlayerId, card_id: str) -> GameState:
    """Record ``player_id``'s card for the current turn.

    The card is not checked against the player's role; a mismatched card is
    ignored when the turn executes.
    """

    selected = dict(state.selected_cards)
    selected[PlayerId(player_id)] = str(card_id.value if isinstance(card_id, Enum) else card_id)
    return replace(state, selected_cards=selected)


def choose_rps(
    state: GameState,
    player_id: PlayerId,
    choice: RpsChoice,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Record a rock-paper-scissors hand and resolve the round once both are in.

    In AI mode the AI's hand is drawn as soon as the human commits, and if the AI
    wins it immediately picks its role at random.
    """

    if state.phase is not GamePhase.ROCK_PAPER_SCISSORS:
        return state
    generator = rng or random.Random()
    player_id = PlayerId(player_id)
    choices = dict(state.rps_choices)
    choices[player_id] = RpsChoice(choice)

    ai_id = state.ai_player()
    if state.game_mode is GameMode.AI and ai_id is not None and player_id is not ai_id:
        choices[ai_id] = rps.random_choice(generator)

    if rps.is_tie(choices):
        return replace(state, rps_choices={}, rps_winner=None)

    winner = rps.resolve(choices)
    if winner is None:
        return replace(state, rps_choices=choices)

    resolved = replace(
        state,
        rps_choices=choices,
        rps_winner=winner,
        phase=phases.check_transition(state.phase, GamePhase.ROLE_SELECTION),
    )
    if state.game_mode is GameMode.AI and winner is ai_id:
        role = generator.choice(list(Role))
        return select_role(resolved, role)
    return resolved


def select_role(state: GameState, role: Role) -> GameState:
    """Let the rock-paper-scissors winner take ``role``; the loser gets the other one."""

    if state.phase is not GamePhase.ROLE_SELECTION:
        return state
    winner = state.rps_winner
    if winner is None:
        raise ValueError("No rock-paper-scissors winner recorded")
    loser = winner.opponent()
    is_mover = Role(role) is Role.MOVER
    return replace(
        state,
        mover=winner if is_mover else loser,
        rotator=loser if is_mover else winner,
        selected_cards={},
        phase=phases.check_transition(state.phase, GamePhase.CARD_SELECTION),
    )


def ready_to_execute(state: GameState) -> bool:
    """Whether both the mover's and the rotator's cards are in."""

    return (
        state.phase is GamePhase.CARD_SELECTION
        and bool(state.selected_cards.get(state.mover))
        and bool(state.selected_cards.get(state.rotator))
    )


def _move_mover(state: GameState, card_id: str) -> Tuple[GameState, MoveOutcome, Optional[Position]]:
    direction = as_direction(card_id)
    if direction is None:
        return state, MoveOutcome.NO_DIRECTION, None
    mover = state.player(state.mover)
    target = compass.step(mover.position, direction, state.compass)
    if not board.is_valid(target):
        return state, MoveOutcome.OUT_OF_BOUNDS, target
    if board.is_occupied(state.board, target):
        return state, MoveOutcome.OCCUPIED, target
    moved = replace(
        state.with_player(replace(mover, position=target)),
        board=board.apply(state.board, mover.position, target, mover.id),
    )
    return moved, MoveOutcome.APPLIED, target


def resolve_turn(state: GameState) -> TurnResult:
    """Execute the submitted cards and report what happened to the move.

    Returns an unexecuted result carrying ``state`` unchanged until both cards
    are present.
    """

    if not ready_to_execute(state):
        return TurnResult(state=state, executed=False)

    mover_card = state.selected_cards[state.mover]
    rotator_card = state.selected_cards[state.rotator]

    # Rotation first: the mover's card is read under the new compass.
    rotation = as_rotation(rotator_card)
    next_state = state
    if rotation is not None:
        next_state = replace(next_state, compass=compass.rotate(state.compass, rotation))

    next_state, outcome, destination = _move_mover(next_state, mover_card)

    if board.is_center(next_state.position_of(state.mover)):
        next_state = replace(
            next_state,
            winner=state.mover,
            phase=phases.check_transition(state.phase, GamePhase.FINISHED),
        )
    else:
        next_state = replace(
            next_state,
            mover=state.rotator,
            rotator=state.mover,
            selected_cards={},
            turn_count=state.turn_count + 1,
            phase=phases.check_transition(state.phase, GamePhase.CARD_SELECTION),
        )
    return TurnResult(
        state=next_state,
        executed=True,
        outcome=outcome,
        rotated=rotation is not None,
        destination=destination,
    )


def execute_cards(state: GameState) -> GameState:
    """Apply rotation then movement; see :func:`resolve_turn`."""

    return resolve_turn(state).state


def winner(state: GameState) -> Optional[PlayerId]:
    return state.winner


def is_terminal(state: GameState) -> bool:
    return phases.is_terminal(state.phase)
