"""Agents for playing Roto Clash."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Dict, List, Optional

from . import board, compass
from .cards import cards_for_role
from .types import Difficulty, Direction, GameState, PlayerId, Role, Rotation, RpsChoice

MOVE_NOISE: Dict[Difficulty, float] = {
    Difficulty.EASY: 50.0,
    Difficulty.MEDIUM: 15.0,
    Difficulty.HARD: 0.0,
}
ROTATION_NOISE: Dict[Difficulty, float] = {
    Difficulty.EASY: 30.0,
    Difficulty.MEDIUM: 10.0,
    Difficulty.HARD: 0.0,
}

BLOCKED_SCORE = -1000
CENTER_BONUS = 1000
DISTANCE_WEIGHT = 10
RETREAT_PENALTY = 20

OPPONENT_CLOSER_PENALTY = 15
OPPONENT_CENTER_PENALTY = 100
OWN_CLOSER_BONUS = 10
OWN_CENTER_BONUS = 50


def evaluate_move(state: GameState, player_id: PlayerId, direction: Direction, compass_direction: int) -> float:
    """Score stepping ``player_id`` along ``direction`` under ``compass_direction``."""

    current = state.position_of(player_id)
    target = compass.step(current, direction, compass_direction)
    if not board.is_valid(target) or board.is_occupied(state.board, target):
        return BLOCKED_SCORE

    distance = board.distance_to_center(target)
    score = -distance * DISTANCE_WEIGHT
    if board.is_center(target):
        score += CENTER_BONUS
    if distance > board.distance_to_center(current):
        score -= RETREAT_PENALTY
    return score


def _reach_delta(state: GameState, player_id: PlayerId, compass_direction: int, closer: int, center: int) -> float:
    current = state.position_of(player_id)
    current_distance = board.distance_to_center(current)
    delta = 0
    for direction in Direction:
        target = compass.step(current, direction, compass_direction)
        if not board.is_valid(target) or board.is_occupied(state.board, target):
            continue
        if board.distance_to_center(target) < current_distance:
            delta += closer
        if board.is_center(target):
            delta += center
    return delta


def evaluate_rotation(state: GameState, player_id: PlayerId, rotation: Rotation) -> float:
    """Score a rotation by what it opens up for both players next move.

    Every reachable cell that brings the opponent closer costs points, every one
    that brings ``player_id`` closer earns them; reaching the center weighs most.
    """

    rotated = compass.rotate(state.compass, rotation)
    opponent = player_id.opponent()
    score = _reach_delta(state, opponent, rotated, -OPPONENT_CLOSER_PENALTY, -OPPONENT_CENTER_PENALTY)
    score += _reach_delta(state, player_id, rotated, OWN_CLOSER_BONUS, OWN_CENTER_BONUS)
    return score


def _noise(rng: random.Random, amplitude: float) -> float:
    if amplitude == 0:
        return 0.0
    return rng.uniform(-amplitude, amplitude)


def choose_ai_card(state: GameState, player_id: PlayerId, rng: Optional[random.Random] = None) -> str:
    """Return the card id the heuristic AI plays for ``player_id`` this turn.

    Candidates are scored in a fixed order and the first strictly best one wins,
    so on ``hard`` (no noise) the choice depends only on the position.
    """

    generator = rng or random.Random()
    difficulty = state.difficulty
    best_card: Optional[str] = None
    best_score = float("-inf")

    if state.role_of(player_id) is Role.MOVER:
        amplitude = MOVE_NOISE[difficulty]
        for direction in Direction:
            score = evaluate_move(state, player_id, direction, state.compass) + _noise(generator, amplitude)
            if score > best_score:
                best_score = score
                best_card = direction.value
    else:
        amplitude = ROTATION_NOISE[difficulty]
        for rotation in Rotation:
            score = evaluate_rotation(state, player_id, rotation) + _noise(generator, amplitude)
            if score > best_score:
                best_score = score
                best_card = rotation.value

    assert best_card is not None
    return best_card


class Agent:
    """Base class for agents."""

    def choose_card(self, state: GameState, player_id: PlayerId) -> str:  # noqa: D401
        """Return a card id for ``player_id`` in the given state."""

        raise NotImplementedError

    def choose_rps(self, state: GameState, player_id: PlayerId) -> RpsChoice:
        raise NotImplementedError

    def choose_role(self, state: GameState, player_id: PlayerId) -> Role:
        raise NotImplementedError


class RandomAgent(Agent):
    """Agent that plays a random card of its current role with reproducible seeding."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def choose_card(self, state: GameState, player_id: PlayerId) -> str:
        cards: List[str] = cards_for_role(state.role_of(player_id))
        return self._rng.choice(cards)

    def choose_rps(self, state: GameState, player_id: PlayerId) -> RpsChoice:
        _ = state, player_id
        return self._rng.choice(list(RpsChoice))

    def choose_role(self, state: GameState, player_id: PlayerId) -> Role:
        _ = state, player_id
        return self._rng.choice(list(Role))


class HeuristicAgent(RandomAgent):
    """Agent driven by the distance-to-center heuristic.

    ``difficulty`` overrides the game's difficulty when given; otherwise the
    state's difficulty decides how much noise is mixed into the scores.
    Hand and role choices stay random.
    """

    def __init__(self, difficulty: Optional[Difficulty] = None, seed: Optional[int] = None):
        super().__init__(seed=seed)
        self.difficulty = None if difficulty is None else Difficulty(difficulty)

    def choose_card(self, state: GameState, player_id: PlayerId) -> str:
        if self.difficulty is not None and self.difficulty is not state.difficulty:
            state = replace(state, difficulty=self.difficulty)
        return choose_ai_card(state, player_id, self._rng)
