from __future__ import annotations

from typing import List

from .board import Board, Cell
from .state import GameState

BIG_ROW_EMPTY = "               |               |"
BIG_ROW_SEP = "---------------+---------------+---------------"
SMALL_ROW_SEP = "---+---+---"
METABOARD_GAP = " " * 14
METABOARD_TITLE = "             metaboard"


def _mark(cell: Cell) -> str:
    return "   " if cell is None else f" {cell} "


def _row(cells: List[Cell]) -> str:
    return "|".join(_mark(c) for c in cells)


def render_board(board: Board) -> str:
    """
    Generates the fixed-width text view of the 9x9 grid, with the metaboard
    drawn to the right of the middle row of boards. Drawn boards stay blank
    on the metaboard.
    """
    meta = board.metaboard
    lines: List[str] = []
    for big_row in range(3):
        lines.append(BIG_ROW_EMPTY)
        for small_row in range(3):
            parts: List[str] = []
            for big_col in range(3):
                sb = board.boards[big_row * 3 + big_col]
                parts.append("  " + _row(list(sb.cells[small_row * 3:small_row * 3 + 3])))
            line = "  |".join(parts)
            if big_row == 1:
                line += METABOARD_GAP + _row(list(meta[small_row * 3:small_row * 3 + 3]))
            lines.append(line)
            if small_row < 2:
                sep = "  |".join("  " + SMALL_ROW_SEP for _ in range(3))
                if big_row == 1:
                    sep += METABOARD_GAP + SMALL_ROW_SEP
                lines.append(sep)
        lines.append(BIG_ROW_EMPTY)
        if big_row < 2:
            lines.append(BIG_ROW_SEP + (METABOARD_TITLE if big_row == 0 else ""))
    return "\n".join(lines) + "\n"


def render(state: GameState) -> str:
    return render_board(state.board)
