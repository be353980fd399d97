from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

from .debug import trace
from .errors import CellOccupied, IllegalBoard, PositionOutOfRange

BOARD_COUNT = 9
CELL_COUNT = 9
POSITION_COUNT = BOARD_COUNT * CELL_COUNT  # 81 absolute squares

# rows, then columns, then diagonals; check_winner returns the first hit
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Player(Enum):
    """The two players. X always moves first."""
    X = "X"
    O = "O"

    def opponent(self) -> "Player":
        if self is Player.X:
            return Player.O
        if self is Player.O:
            return Player.X
        raise AssertionError(f"unknown player {self!r}")

    def __str__(self) -> str:
        return self.value


Cell = Optional[Player]  # None means empty


class OutcomeKind(Enum):
    OPEN = "open"
    WON = "won"
    DRAWN = "drawn"


@dataclass(frozen=True)
class Outcome:
    """Result of a small board: still open, won by a player, or drawn."""
    kind: OutcomeKind
    winner: Optional[Player] = None

    def __post_init__(self) -> None:
        if (self.kind is OutcomeKind.WON) != (self.winner is not None):
            raise ValueError("winner must be set for won outcomes only")

    @staticmethod
    def won(player: Player) -> "Outcome":
        return Outcome(OutcomeKind.WON, player)

    @property
    def is_decided(self) -> bool:
        return self.kind is not OutcomeKind.OPEN


OPEN = Outcome(OutcomeKind.OPEN)
DRAWN = Outcome(OutcomeKind.DRAWN)


def check_winner(cells: Sequence[Cell]) -> Optional[Player]:
    """
    Tic-tac-toe line detection over 9 row-major cells.
    Used for small boards and for the metaboard alike.
    """
    for a, b, c in WIN_LINES:
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return cells[a]
    return None


@dataclass(frozen=True)
class Position:
    """
    A valid square of the 9x9 grid, split into small board and cell.

    The absolute numbering walks each small board row-major, board after board:

                    |               |
        0 | 1 | 2   |   9 | 10| 11  |   18| 19| 20
       ---+---+---  |  ---+---+---  |  ---+---+---
        3 | 4 | 5   |   12| 13| 14  |   21| 22| 23
       ---+---+---  |  ---+---+---  |  ---+---+---
        6 | 7 | 8   |   15| 16| 17  |   24| 25| 26
                    |               |
    ----------------+---------------+---------------
        27 .. 53 for the middle row of boards, 54 .. 80 for the bottom row.
    """
    board_index: int
    cell_index: int

    @staticmethod
    def from_absolute(pos: int) -> "Position":
        if isinstance(pos, bool) or not isinstance(pos, int) or not 0 <= pos < POSITION_COUNT:
            raise PositionOutOfRange()
        return Position(pos // CELL_COUNT, pos % CELL_COUNT)

    @property
    def absolute(self) -> int:
        return self.board_index * CELL_COUNT + self.cell_index


EMPTY_CELLS: Tuple[Cell, ...] = (None,) * CELL_COUNT


@dataclass(frozen=True)
class SmallBoard:
    """One inner 3x3 board. Cells are row-major and never revert once played."""
    cells: Tuple[Cell, ...] = EMPTY_CELLS

    def __post_init__(self) -> None:
        if len(self.cells) != CELL_COUNT:
            raise ValueError(f"small board needs {CELL_COUNT} cells, got {len(self.cells)}")

    @property
    def outcome(self) -> Outcome:
        winner = check_winner(self.cells)
        if winner is not None:
            return Outcome.won(winner)
        if all(c is not None for c in self.cells):
            return DRAWN
        return OPEN

    @property
    def is_playable(self) -> bool:
        # an open board always has an empty cell
        return not self.outcome.is_decided

    def empty_cells(self) -> Iterable[int]:
        for i, c in enumerate(self.cells):
            if c is None:
                yield i

    def place(self, cell_index: int, player: Player) -> "SmallBoard":
        """Returns a copy with player's mark at cell_index."""
        if self.cells[cell_index] is not None:
            raise CellOccupied()
        if self.outcome.is_decided:
            raise IllegalBoard("That board is already decided")
        cells = list(self.cells)
        cells[cell_index] = player
        return SmallBoard(tuple(cells))


def _empty_boards() -> Tuple[SmallBoard, ...]:
    return tuple(SmallBoard() for _ in range(BOARD_COUNT))


@dataclass(frozen=True)
class Board:
    """The nine small boards in a 3x3 grid; the metaboard is derived from them."""
    boards: Tuple[SmallBoard, ...] = field(default_factory=_empty_boards)

    def __post_init__(self) -> None:
        if len(self.boards) != BOARD_COUNT:
            raise ValueError(f"board needs {BOARD_COUNT} small boards, got {len(self.boards)}")

    @staticmethod
    def from_cells(cells: Sequence[Cell]) -> "Board":
        """Builds a board from 81 cells in absolute-position order."""
        if len(cells) != POSITION_COUNT:
            raise ValueError(f"expected {POSITION_COUNT} cells, got {len(cells)}")
        return Board(tuple(
            SmallBoard(tuple(cells[b * CELL_COUNT:(b + 1) * CELL_COUNT]))
            for b in range(BOARD_COUNT)
        ))

    def cells(self) -> Tuple[Cell, ...]:
        """All 81 cells in absolute-position order."""
        return tuple(c for sb in self.boards for c in sb.cells)

    def cell(self, position: Position) -> Cell:
        return self.boards[position.board_index].cells[position.cell_index]

    def outcome(self, board_index: int) -> Outcome:
        return self.boards[board_index].outcome

    def is_playable(self, board_index: int) -> bool:
        if not 0 <= board_index < BOARD_COUNT:
            raise IndexError(f"board index {board_index} out of range")
        return self.boards[board_index].is_playable

    def playable_boards(self) -> FrozenSet[int]:
        return frozenset(b for b in range(BOARD_COUNT) if self.is_playable(b))

    @property
    def metaboard(self) -> Tuple[Cell, ...]:
        """Winner of each small board; None for open and drawn boards alike."""
        return tuple(sb.outcome.winner for sb in self.boards)

    def winner(self) -> Optional[Player]:
        return check_winner(self.metaboard)

    def place(self, position: Position, player: Player) -> "Board":
        """
        Puts player's mark on position and returns the new board.
        Turn order and legal boards are the caller's business.
        """
        b = position.board_index
        small = self.boards[b].place(position.cell_index, player)
        outcome = small.outcome
        if outcome.kind is OutcomeKind.WON:
            if outcome.winner != player:
                raise RuntimeError(f"board {b} won by {outcome.winner} on a move by {player}")
            trace(f"{player} wins board {b}!!")
        elif outcome.kind is OutcomeKind.DRAWN:
            trace(f"board {b} is drawn")
        boards = list(self.boards)
        boards[b] = small
        return Board(tuple(boards))
