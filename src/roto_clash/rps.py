"""Rock-paper-scissors sub-game that decides who picks a role first."""
from __future__ import annotations

import random
from typing import Dict, Mapping, Optional

from .types import PlayerId, RpsChoice

BEATS: Dict[RpsChoice, RpsChoice] = {
    RpsChoice.ROCK: RpsChoice.SCISSORS,
    RpsChoice.PAPER: RpsChoice.ROCK,
    RpsChoice.SCISSORS: RpsChoice.PAPER,
}


def beats(a: RpsChoice, b: RpsChoice) -> bool:
    return BEATS[a] is b


def random_choice(rng: Optional[random.Random] = None) -> RpsChoice:
    generator = rng or random.Random()
    return generator.choice(list(RpsChoice))


def resolve(choices: Mapping[PlayerId, RpsChoice]) -> Optional[PlayerId]:
    """Return the winner once both players chose different hands.

    ``None`` means the round is not decided: a choice is missing or it is a tie.
    """

    first = choices.get(PlayerId.PLAYER1)
    second = choices.get(PlayerId.PLAYER2)
    if first is None or second is None or first is second:
        return None
    return PlayerId.PLAYER1 if beats(first, second) else PlayerId.PLAYER2


def is_tie(choices: Mapping[PlayerId, RpsChoice]) -> bool:
    first = choices.get(PlayerId.PLAYER1)
    return first is not None and first is choices.get(PlayerId.PLAYER2)
