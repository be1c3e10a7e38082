import random

import pytest

from roto_clash import board, compass, engine
from roto_clash.agents import RandomAgent
from roto_clash.engine import MoveOutcome
from roto_clash.types import (
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

P1 = PlayerId.PLAYER1
P2 = PlayerId.PLAYER2


def build_state(p1, p2, compass_direction=0, mover=P1, phase=GamePhase.CARD_SELECTION) -> GameState:
    rows = [[None for _ in range(board.BOARD_SIZE)] for _ in range(board.BOARD_SIZE)]
    rows[p1[1]][p1[0]] = P1
    rows[p2[1]][p2[0]] = P2
    return GameState(
        board=tuple(tuple(row) for row in rows),
        players=(Player(P1, "Player 1", Position(*p1)), Player(P2, "Player 2", Position(*p2))),
        compass=compass_direction,
        mover=mover,
        rotator=mover.opponent(),
        phase=phase,
        game_mode=GameMode.LOCAL,
        difficulty=Difficulty.HARD,
    )


def play(state, mover_card, rotator_card):
    state = engine.select_card(state, state.mover, mover_card)
    state = engine.select_card(state, state.rotator, rotator_card)
    return engine.resolve_turn(state)


def test_rotation_applies_before_movement():
    state = build_state((0, 4), (4, 0), compass_direction=0)

    result = play(state, "north", "clockwise")
    after = result.state

    assert result.executed
    assert result.outcome is MoveOutcome.APPLIED
    assert after.compass == 90
    assert after.position_of(P1) == Position(1, 4)
    assert after.board[4][1] is P1 and after.board[4][0] is None
    assert after.winner is None
    assert after.mover is P2 and after.rotator is P1
    assert after.turn_count == 1
    assert after.selected_cards == {}
    assert after.phase is GamePhase.CARD_SELECTION


def test_reaching_center_wins():
    state = build_state((2, 3), (4, 0), compass_direction=90)

    result = play(state, "north", "counterclockwise")

    assert result.state.compass == 0
    assert result.state.position_of(P1) == board.CENTER
    assert result.state.winner is P1
    assert result.state.phase is GamePhase.FINISHED
    assert result.state.turn_count == 0
    assert result.state.mover is P1


def test_win_after_several_turns():
    state = build_state((2, 4), (4, 0), compass_direction=0)

    state = play(state, "west", "clockwise").state  # west at 90 is absolute north
    assert state.position_of(P1) == Position(2, 3)
    assert state.mover is P2

    state = play(state, "east", "counterclockwise").state  # off the board, dropped
    assert state.compass == 0
    assert state.position_of(P2) == Position(4, 0)
    assert state.mover is P1

    state = play(state, "west", "clockwise").state
    assert state.compass == 90
    assert state.winner is P1
    assert state.turn_count == 2


def test_blocked_move_still_completes_turn():
    state = build_state((3, 0), (4, 0), compass_direction=270)

    result = play(state, "east", "clockwise")
    after = result.state

    assert result.outcome is MoveOutcome.OCCUPIED
    assert result.destination == Position(4, 0)
    assert after.compass == 0
    assert after.board == state.board
    assert after.position_of(P1) == Position(3, 0)
    assert after.turn_count == 1
    assert after.mover is P2 and after.rotator is P1


def test_out_of_bounds_move_is_dropped():
    state = build_state((0, 4), (4, 0), compass_direction=0)

    result = play(state, "south", "clockwise")

    assert result.outcome is MoveOutcome.OUT_OF_BOUNDS
    assert result.state.position_of(P1) == Position(0, 4)
    assert result.state.turn_count == 1


def test_mismatched_cards_are_ignored_at_execution():
    state = build_state((0, 4), (4, 0), compass_direction=180)

    result = play(state, "clockwise", "north")

    assert result.executed
    assert not result.rotated
    assert result.outcome is MoveOutcome.NO_DIRECTION
    assert result.state.compass == 180
    assert result.state.board == state.board
    assert result.state.mover is P2


def test_incomplete_selection_is_noop():
    state = build_state((0, 4), (4, 0))
    assert engine.execute_cards(state) is state

    partial = engine.select_card(state, P1, "north")
    assert engine.execute_cards(partial) is partial
    assert engine.execute_cards(engine.execute_cards(partial)) is partial
    assert not engine.resolve_turn(partial).executed


def test_finished_game_does_not_execute_again():
    state = build_state((2, 3), (4, 0), compass_direction=0)
    finished = play(state, "north", "clockwise")
    assert finished.state.phase is GamePhase.CARD_SELECTION  # north at 90 goes east

    state = build_state((2, 3), (4, 0), compass_direction=270)
    finished = play(state, "north", "clockwise").state
    assert finished.phase is GamePhase.FINISHED
    assert engine.execute_cards(finished) is finished


def test_select_card_does_not_mutate_previous_snapshot():
    state = build_state((0, 4), (4, 0))
    updated = engine.select_card(state, P1, "west")

    assert state.selected_cards == {}
    assert updated.selected_cards == {P1: "west"}


def _start_local(seed):
    rng = random.Random(seed)
    state = engine.initialize(GameMode.LOCAL, Difficulty.MEDIUM, rng)
    state = engine.choose_rps(state, P1, RpsChoice.ROCK, rng)
    state = engine.choose_rps(state, P2, RpsChoice.SCISSORS, rng)
    return engine.select_role(state, Role.ROTATOR)


def test_random_play_keeps_invariants():
    for seed in range(20):
        state = _start_local(seed)
        agents = {P1: RandomAgent(seed=seed), P2: RandomAgent(seed=seed + 100)}
        for _ in range(60):
            before = state
            for pid in (state.mover, state.rotator):
                state = engine.select_card(state, pid, agents[pid].choose_card(state, pid))
            state = engine.execute_cards(state)

            assert state.compass in compass.COMPASS_DIRECTIONS
            cells = board.occupied_cells(state.board)
            assert len(cells) == 2
            for player in state.players:
                assert cells[player.position] is player.id
            assert state.mover is not state.rotator

            won = state.winner is not None and state.phase is GamePhase.FINISHED
            advanced = (
                state.winner is None
                and state.phase is GamePhase.CARD_SELECTION
                and state.turn_count == before.turn_count + 1
                and state.mover is before.rotator
            )
            assert won != advanced
            if won:
                assert state.position_of(state.winner) == board.CENTER
                break


def test_select_role_assigns_winner():
    rng = random.Random(3)
    state = engine.initialize(GameMode.LOCAL, Difficulty.MEDIUM, rng)
    state = engine.choose_rps(state, P1, RpsChoice.PAPER)
    state = engine.choose_rps(state, P2, RpsChoice.SCISSORS)
    assert state.rps_winner is P2

    as_mover = engine.select_role(state, Role.MOVER)
    assert as_mover.mover is P2 and as_mover.rotator is P1
    assert as_mover.phase is GamePhase.CARD_SELECTION

    as_rotator = engine.select_role(state, Role.ROTATOR)
    assert as_rotator.mover is P1 and as_rotator.rotator is P2


def test_select_role_outside_role_selection_is_noop():
    state = build_state((0, 4), (4, 0))
    assert engine.select_role(state, Role.MOVER) is state


def test_select_role_without_winner_raises():
    state = build_state((0, 4), (4, 0), phase=GamePhase.ROLE_SELECTION)
    with pytest.raises(ValueError):
        engine.select_role(state, Role.MOVER)
