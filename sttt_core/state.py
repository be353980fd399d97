from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from .board import BOARD_COUNT, Board, Player


class StatusKind(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    TIED = "tied"


@dataclass(frozen=True)
class Status:
    kind: StatusKind
    winner: Optional[Player] = None

    def __post_init__(self) -> None:
        if (self.kind is StatusKind.WON) != (self.winner is not None):
            raise ValueError("winner must be set for won games only")

    @staticmethod
    def won(player: Player) -> "Status":
        return Status(StatusKind.WON, player)

    @property
    def is_over(self) -> bool:
        return self.kind is not StatusKind.IN_PROGRESS


IN_PROGRESS = Status(StatusKind.IN_PROGRESS)
TIED = Status(StatusKind.TIED)


@dataclass(frozen=True)
class GameState:
    """Represents the dynamic state of the game: the board, whose turn it is and where they may play."""
    board: Board = field(default_factory=Board)
    player: Player = Player.X
    legal_boards: FrozenSet[int] = frozenset(range(BOARD_COUNT))
    status: Status = IN_PROGRESS

    def is_over(self) -> bool:
        return self.status.is_over

    def other_player(self) -> Player:
        return self.player.opponent()
