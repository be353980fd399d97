"""
Super Tic-Tac-Toe core Python package.

This package contains the board model and the pure-logic turn engine behind
game.py, so front ends (terminal loop, Flask app) stay thin and the rules stay
testable on their own.
Modules:
- board.py: Player, Outcome, Position, SmallBoard, Board, check_winner
- errors.py: MoveError and its subclasses
- state.py: Status, GameState
- moves.py: new_game, apply_move, next_legal_boards, legal_moves
- render.py: fixed-width ASCII rendering
- cli.py: interactive terminal loop
"""
