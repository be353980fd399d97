from __future__ import annotations

# Facade module that re-exports the Super Tic-Tac-Toe core.
# Front ends (app.py, the terminal loop) and tests import from here.
# Single-responsibility modules live under sttt_core/*.

from sttt_core.board import (  # noqa: F401
    BOARD_COUNT,
    CELL_COUNT,
    DRAWN,
    OPEN,
    POSITION_COUNT,
    WIN_LINES,
    Board,
    Cell,
    Outcome,
    OutcomeKind,
    Player,
    Position,
    SmallBoard,
    check_winner,
)
from sttt_core.errors import (  # noqa: F401
    AlreadyFinished,
    CellOccupied,
    IllegalBoard,
    MoveError,
    PositionOutOfRange,
    WrongTurn,
)
from sttt_core.state import IN_PROGRESS, TIED, GameState, Status, StatusKind  # noqa: F401
from sttt_core.moves import (  # noqa: F401
    apply_move,
    current_player,
    legal_moves,
    new_game,
    next_legal_boards,
)
from sttt_core.render import render, render_board  # noqa: F401


def main() -> None:
    # CLI driver delegated to sttt_core.cli
    from sttt_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
