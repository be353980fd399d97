from __future__ import annotations

from typing import Optional


class MoveError(ValueError):
    """Base class for moves the engine rejects. The game state is left untouched."""
    kind = 'invalid_move'
    default_message = 'Invalid move'

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class PositionOutOfRange(MoveError):
    kind = 'position_out_of_range'
    default_message = 'Square out of limits'


class WrongTurn(MoveError):
    kind = 'wrong_turn'
    default_message = "It's not your turn!"


class IllegalBoard(MoveError):
    kind = 'illegal_board'
    default_message = 'You cannot play in that board!'


class CellOccupied(MoveError):
    kind = 'cell_occupied'
    default_message = 'That square is not empty'


class AlreadyFinished(MoveError):
    kind = 'already_finished'
    default_message = 'The game is already over'
