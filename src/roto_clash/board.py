"""Board model: grid occupancy and position arithmetic.

The board performs no validation of its own; callers check bounds and
occupancy before calling :func:`apply`.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .types import Board, PlayerId, Position

BOARD_SIZE = 5
CENTER = Position(2, 2)
START_POSITIONS: Dict[PlayerId, Position] = {
    PlayerId.PLAYER1: Position(0, 4),
    PlayerId.PLAYER2: Position(4, 0),
}


def new_board() -> Board:
    """Return a board with both players on their start cells."""

    rows: List[List[Optional[PlayerId]]] = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
    for player_id, pos in START_POSITIONS.items():
        rows[pos.y][pos.x] = player_id
    return tuple(tuple(row) for row in rows)


def is_valid(pos: Position) -> bool:
    return 0 <= pos.x < BOARD_SIZE and 0 <= pos.y < BOARD_SIZE


def is_occupied(board: Board, pos: Position) -> bool:
    return board[pos.y][pos.x] is not None


def is_center(pos: Position) -> bool:
    return pos == CENTER


def apply(board: Board, from_pos: Position, to_pos: Position, player_id: PlayerId) -> Board:
    """Return a new board with ``from_pos`` cleared and ``player_id`` placed on ``to_pos``."""

    rows = [list(row) for row in board]
    rows[from_pos.y][from_pos.x] = None
    rows[to_pos.y][to_pos.x] = player_id
    return tuple(tuple(row) for row in rows)


def occupied_cells(board: Board) -> Dict[Position, PlayerId]:
    cells: Dict[Position, PlayerId] = {}
    for y, row in enumerate(board):
        for x, cell in enumerate(row):
            if cell is not None:
                cells[Position(x, y)] = cell
    return cells


def distance(a: Position, b: Position) -> int:
    """Manhattan distance between two cells."""

    return abs(a.x - b.x) + abs(a.y - b.y)


def distance_to_center(pos: Position) -> int:
    return distance(pos, CENTER)


def format_board(board: Board) -> str:
    """Render the board as text, one row per line."""

    marks = {PlayerId.PLAYER1: " 1 ", PlayerId.PLAYER2: " 2 "}
    lines: List[str] = []
    for y, row in enumerate(board):
        cells = []
        for x, cell in enumerate(row):
            if cell is not None:
                cells.append(marks[cell])
            elif (x, y) == CENTER:
                cells.append(" * ")
            else:
                cells.append(" . ")
        lines.append("".join(cells))
    return "\n".join(lines)
