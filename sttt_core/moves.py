from __future__ import annotations

from typing import FrozenSet, List

from .board import Board, Player, Position
from .debug import trace
from .errors import AlreadyFinished, IllegalBoard, WrongTurn
from .state import IN_PROGRESS, TIED, GameState, Status


def new_game() -> GameState:
    """X to move, every small board open."""
    return GameState()


def current_player(state: GameState) -> Player:
    return state.player


def next_legal_boards(board: Board, cell_index: int) -> FrozenSet[int]:
    """
    Mirror rule: a move in cell c sends the opponent to small board c.
    If that board is won or full, any playable board may be chosen.
    """
    if board.is_playable(cell_index):
        return frozenset([cell_index])
    return board.playable_boards()


def legal_moves(state: GameState) -> List[int]:
    """Absolute positions the player to move may choose from."""
    if state.is_over():
        return []
    moves: List[int] = []
    for b in sorted(state.legal_boards):
        for c in state.board.boards[b].empty_cells():
            moves.append(Position(b, c).absolute)
    return moves


def apply_move(state: GameState, player: Player, position: int) -> GameState:
    """
    Plays player's mark at the absolute position and returns the resulting state.

    Raises a MoveError subclass (AlreadyFinished, WrongTurn, PositionOutOfRange,
    IllegalBoard, CellOccupied) without building any new state when the move is
    rejected. The returned state's status tells whether the game goes on.
    """
    if state.is_over():
        raise AlreadyFinished()
    if player != state.player:
        raise WrongTurn()
    pos = Position.from_absolute(position)
    if pos.board_index not in state.legal_boards:
        raise IllegalBoard()

    board = state.board.place(pos, player)

    winner = board.winner()
    if winner is not None:
        if winner != player:
            raise RuntimeError(f"metaboard won by {winner} on a move by {player}")
        return GameState(board=board, player=player, legal_boards=frozenset(), status=Status.won(player))

    legal = next_legal_boards(board, pos.cell_index)
    trace(f"Valid boards: {sorted(legal)}")

    if not legal:
        return GameState(board=board, player=player, legal_boards=legal, status=TIED)
    return GameState(board=board, player=player.opponent(), legal_boards=legal, status=IN_PROGRESS)
