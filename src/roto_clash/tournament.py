"""Tournament/benchmark runner for Roto Clash.

Usage example:
- python -m roto_clash.tournament --games 200 --player1 heuristic --player2 random --seed 1
"""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from .agents import Agent
from .runner import AGENT_CHOICES, DEFAULT_MAX_TURNS, build_agent, play_game
from .types import Difficulty, PlayerId


@dataclass
class TournamentResult:
    games: int
    wins: Dict[PlayerId, int]
    undecided: int
    avg_turns: float
    avg_game_ms: float

    def win_rate(self, player_id: PlayerId) -> float:
        return 0.0 if self.games == 0 else self.wins[player_id] / self.games


def _average(values):
    return 0.0 if not values else sum(values) / len(values)


def run_tournament(
    agent1: Agent,
    agent2: Agent,
    games: int = 200,
    seed: int = 0,
    difficulty: Difficulty = Difficulty.MEDIUM,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> TournamentResult:
    """Play ``games`` seeded games between the same two agents."""

    rng = random.Random(seed)
    wins = {PlayerId.PLAYER1: 0, PlayerId.PLAYER2: 0}
    undecided = 0
    turns: List[int] = []
    times: List[float] = []

    for _ in range(games):
        summary = play_game(
            agent1,
            agent2,
            difficulty=difficulty,
            seed=rng.randint(0, 2**31 - 1),
            max_turns=max_turns,
        )
        if summary.winner is None:
            undecided += 1
        else:
            wins[summary.winner] += 1
        turns.append(summary.turns)
        times.append(summary.elapsed_ms)

    return TournamentResult(
        games=games,
        wins=wins,
        undecided=undecided,
        avg_turns=_average(turns),
        avg_game_ms=_average(times),
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Roto Clash tournament runner")
    parser.add_argument("--games", type=int, default=200)
    parser.add_argument("--player1", choices=AGENT_CHOICES, default="heuristic")
    parser.add_argument("--player2", choices=AGENT_CHOICES, default="random")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.MEDIUM.value)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    difficulty = Difficulty(args.difficulty)
    try:
        agent1 = build_agent(args.player1, difficulty, seed=args.seed)
        agent2 = build_agent(args.player2, difficulty, seed=args.seed + 1)
        result = run_tournament(
            agent1,
            agent2,
            games=args.games,
            seed=args.seed,
            difficulty=difficulty,
            max_turns=args.max_turns,
        )
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)

    print(f"Player 1 wins: {result.wins[PlayerId.PLAYER1]}, Player 2 wins: {result.wins[PlayerId.PLAYER2]}")
    print(f"Undecided: {result.undecided}")
    print(f"Win rate (Player 1): {result.win_rate(PlayerId.PLAYER1):.3f}")
    print(f"Average turns: {result.avg_turns:.2f}")
    print(f"Average game time: {result.avg_game_ms:.2f} ms")


if __name__ == "__main__":
    main()
