"""Card catalogue and text parsing for card submissions."""
from __future__ import annotations

from typing import Dict, List, Optional

from .types import Direction, Role, Rotation

DIRECTION_CARDS: List[str] = [d.value for d in Direction]
ROTATION_CARDS: List[str] = [r.value for r in Rotation]

CARD_LABELS: Dict[str, str] = {
    "north": "North",
    "south": "South",
    "east": "East",
    "west": "West",
    "clockwise": "Clockwise",
    "counterclockwise": "Counter-clockwise",
}

_ALIASES: Dict[str, str] = {
    "n": "north",
    "s": "south",
    "e": "east",
    "w": "west",
    "cw": "clockwise",
    "ccw": "counterclockwise",
    "counter-clockwise": "counterclockwise",
    "anticlockwise": "counterclockwise",
}


def as_direction(card_id: str) -> Optional[Direction]:
    """Return the direction a card id names, or ``None`` for any other id."""

    try:
        return Direction(card_id)
    except ValueError:
        return None


def as_rotation(card_id: str) -> Optional[Rotation]:
    try:
        return Rotation(card_id)
    except ValueError:
        return None


def cards_for_role(role: Role) -> List[str]:
    return list(DIRECTION_CARDS if role is Role.MOVER else ROTATION_CARDS)


def parse_card(raw: str) -> str:
    """Parse user text such as ``"N"``, ``"cw"`` or ``"Counter-clockwise"`` into a card id."""

    text = raw.strip().lower()
    if not text:
        raise ValueError("Empty card")
    card = _ALIASES.get(text, text)
    if card not in CARD_LABELS:
        raise ValueError(f"Unknown card '{raw}'")
    return card
