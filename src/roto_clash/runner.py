"""CLI runner for Roto Clash self-play.

Usage examples:
- Single game: ``python -m roto_clash.runner --player1 heuristic --player2 random --seed 42``
- Hard AI mirror with boards: ``python -m roto_clash.runner --difficulty hard --show-board``
"""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from . import board, engine
from .agents import Agent, HeuristicAgent, RandomAgent
from .game_controller import GameController, TurnRecord
from .storage import JsonHistoryStore, JsonSettingsStore
from .types import Difficulty, GameMode, PlayerId

DEFAULT_MAX_TURNS = 200
AGENT_CHOICES = ["random", "heuristic"]


@dataclass
class GameSummary:
    winner: Optional[PlayerId]
    turns: int
    turn_log: List[TurnRecord]
    elapsed_ms: float


def build_agent(name: str, difficulty: Optional[Difficulty], seed: Optional[int]) -> Agent:
    if name == "random":
        return RandomAgent(seed=seed)
    if name == "heuristic":
        return HeuristicAgent(difficulty=difficulty, seed=seed)
    raise ValueError(f"Unknown agent '{name}'")


def play_game(
    agent1: Agent,
    agent2: Agent,
    difficulty: Difficulty = Difficulty.MEDIUM,
    seed: Optional[int] = None,
    max_turns: int = DEFAULT_MAX_TURNS,
    emit_moves: bool = False,
    show_board: bool = False,
    history_store: Optional[JsonHistoryStore] = None,
) -> GameSummary:
    """Play one local game between two agents.

    The game stops undecided (``winner=None``) once ``max_turns`` turns resolved
    without anyone reaching the center.
    """

    if max_turns < 1:
        raise ValueError("max_turns must be positive")
    start = time.monotonic()
    controller = GameController(
        mode=GameMode.LOCAL,
        difficulty=difficulty,
        agents={PlayerId.PLAYER1: agent1, PlayerId.PLAYER2: agent2},
        seed=seed,
        history_store=history_store,
    )
    controller.play_agents_setup()
    state = controller.state
    if emit_moves:
        rps_winner = state.player(state.rps_winner).name if state.rps_winner else "-"
        print(f"RPS winner: {rps_winner}; {state.player(state.mover).name} moves first; compass={state.compass}")
    if show_board:
        print(board.format_board(state.board))
        print()

    while not engine.is_terminal(controller.state) and len(controller.turn_log) < max_turns:
        result = controller.play_agents_turn()
        record = controller.turn_log[-1]
        if emit_moves:
            outcome = result.outcome.value if result.outcome else "-"
            print(
                f"Turn {record.turn}: {record.mover.value} {record.mover_card} / {record.rotator_card} "
                f"-> compass={record.compass_after} pos={tuple(record.position_after)} ({outcome})"
            )
        if show_board:
            print(board.format_board(controller.state.board))
            print()

    winner = engine.winner(controller.state)
    if show_board or emit_moves:
        print(f"Winner: {controller.state.player(winner).name}" if winner else "Winner: None (turn limit)")
    return GameSummary(
        winner=winner,
        turns=len(controller.turn_log),
        turn_log=list(controller.turn_log),
        elapsed_ms=(time.monotonic() - start) * 1000.0,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Roto Clash self-play runner")
    parser.add_argument("--player1", choices=AGENT_CHOICES, default="heuristic")
    parser.add_argument("--player2", choices=AGENT_CHOICES, default="heuristic")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS)
    parser.add_argument("--show-board", action="store_true", help="Print the board after every turn")
    parser.add_argument("--quiet", action="store_true", help="Only print the result")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--history", type=str, default=None, help="JSON file to append the finished game to")
    parser.add_argument("--settings", type=str, default=None, help="JSON settings file for the default difficulty")
    return parser.parse_args(argv)


def resolve_difficulty(args: argparse.Namespace) -> Difficulty:
    if args.difficulty is not None:
        return Difficulty(args.difficulty)
    if args.settings:
        return JsonSettingsStore(args.settings).load().difficulty
    return Difficulty.MEDIUM


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        difficulty = resolve_difficulty(args)
        agent1 = build_agent(args.player1, difficulty, seed=args.seed)
        agent2 = build_agent(args.player2, difficulty, seed=None if args.seed is None else args.seed + 1)
        summary = play_game(
            agent1,
            agent2,
            difficulty=difficulty,
            seed=args.seed,
            max_turns=args.max_turns,
            emit_moves=not args.quiet,
            show_board=args.show_board,
            history_store=JsonHistoryStore(args.history) if args.history else None,
        )
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)

    winner = summary.winner.value if summary.winner else "none"
    print(f"Game winner: {winner} after {summary.turns} turns")


if __name__ == "__main__":
    main()
