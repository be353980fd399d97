from __future__ import annotations

import argparse
import os
from typing import Callable, List, Optional

from .errors import MoveError
from .moves import apply_move, current_player, new_game
from .render import render
from .state import GameState, StatusKind


def prompt_move(state: GameState, input_fn: Callable[[str], str], print_fn: Callable[..., None]) -> GameState:
    """Asks until the player to move enters an accepted square; returns the new state."""
    player = current_player(state)
    while True:
        text = input_fn(f" --> {player} to play: ").strip()
        try:
            square = int(text)
            if square < 0:
                raise ValueError(text)
        except ValueError:
            print_fn('Please type a number!')
            continue
        try:
            return apply_move(state, player, square)
        except MoveError as e:
            print_fn(f'Error: {e}')


def play(
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[..., None] = print,
    show_legal: bool = False,
) -> GameState:
    """Runs one game on the terminal. Returns the last state reached (finished unless input ran out)."""
    print_fn('Welcome to Super Tic Tac Toe!')
    state = new_game()
    while not state.is_over():
        print_fn(render(state))
        if show_legal:
            print_fn('Legal boards:', sorted(state.legal_boards))
        try:
            state = prompt_move(state, input_fn, print_fn)
        except EOFError:
            print_fn()
            print_fn('No more input, leaving the game unfinished.')
            return state

    print_fn(render(state))
    if state.status.kind is StatusKind.WON:
        print_fn(f'{state.status.winner} wins!')
    else:
        print_fn('Game ended in a tie')
    return state


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Super Tic-Tac-Toe for two players on one terminal')
    parser.add_argument('--show-legal', action='store_true', help='Print the boards you may play in before each prompt')
    parser.add_argument('--debug', action='store_true', help='Trace board wins and legal boards (same as STTT_DEBUG=1)')
    args = parser.parse_args(argv)

    if args.debug:
        os.environ['STTT_DEBUG'] = '1'

    play(show_legal=args.show_legal)
