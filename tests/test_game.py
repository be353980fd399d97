import io
import os
import unittest
from contextlib import redirect_stdout
from unittest import mock

from game import (
    IN_PROGRESS,
    TIED,
    AlreadyFinished,
    Board,
    CellOccupied,
    GameState,
    IllegalBoard,
    Outcome,
    Player,
    PositionOutOfRange,
    SmallBoard,
    Status,
    WrongTurn,
    apply_move,
    current_player,
    legal_moves,
    new_game,
    next_legal_boards,
)

X, O = Player.X, Player.O

# X takes boards 0, 4 and 8 (metaboard diagonal); O steers X back each time.
DIAGONAL_WIN = [1, 9, 2, 18, 0, 13, 39, 31, 41, 49, 40, 26, 78, 62, 79, 71, 80]


def _mk_board(rows):
    table = {'X': X, 'O': O, '.': None}
    return Board(tuple(SmallBoard(tuple(table[ch] for ch in r)) for r in rows))


def play_all(positions, state=None):
    state = state or new_game()
    for p in positions:
        state = apply_move(state, state.player, p)
    return state


class TestNewGame(unittest.TestCase):
    def test_given_new_game_when_inspecting_then_x_to_move_and_all_boards_legal(self):
        s = new_game()
        self.assertIs(current_player(s), X)
        self.assertEqual(s.legal_boards, frozenset(range(9)))
        self.assertEqual(s.status, IN_PROGRESS)
        self.assertFalse(s.is_over())
        self.assertEqual(legal_moves(s), list(range(81)))

    def test_given_two_new_games_when_playing_one_then_other_untouched(self):
        a = new_game()
        b = new_game()
        a2 = apply_move(a, X, 40)
        self.assertIsNone(b.board.cells()[40])
        self.assertIs(a2.board.cells()[40], X)


class TestApplyMove(unittest.TestCase):
    def test_given_x0_o1_x9_when_played_then_all_succeed(self):
        s = apply_move(new_game(), X, 0)
        self.assertEqual(s.legal_boards, frozenset({0}))
        s = apply_move(s, O, 1)
        self.assertEqual(s.legal_boards, frozenset({1}))
        s = apply_move(s, X, 9)
        self.assertIs(s.player, O)
        self.assertEqual(s.legal_boards, frozenset({0}))
        self.assertEqual(s.status, IN_PROGRESS)

    def test_given_successful_moves_when_played_then_turns_alternate(self):
        s = new_game()
        expected = X
        for p in DIAGONAL_WIN[:-1]:
            self.assertIs(s.player, expected)
            s = apply_move(s, expected, p)
            expected = expected.opponent()

    def test_given_wrong_player_when_moving_then_wrong_turn_and_state_unchanged(self):
        s = new_game()
        with self.assertRaises(WrongTurn):
            apply_move(s, O, 0)
        # turn is checked before the square
        with self.assertRaises(WrongTurn):
            apply_move(s, O, 81)
        self.assertEqual(s, new_game())
        self.assertIs(apply_move(s, X, 0).player, O)

    def test_given_out_of_range_square_when_moving_then_position_out_of_range(self):
        s = new_game()
        for bad in (81, -1, 1000):
            with self.assertRaises(PositionOutOfRange):
                apply_move(s, X, bad)
        self.assertEqual(s, new_game())

    def test_given_square_outside_legal_board_when_moving_then_illegal_board(self):
        s = apply_move(new_game(), X, 0)
        with self.assertRaises(IllegalBoard) as ctx:
            apply_move(s, O, 9)
        self.assertEqual(str(ctx.exception), 'You cannot play in that board!')
        self.assertEqual(s.legal_boards, frozenset({0}))

    def test_given_taken_square_when_moving_then_cell_occupied_and_retry_works(self):
        s = apply_move(new_game(), X, 0)
        with self.assertRaises(CellOccupied):
            apply_move(s, O, 0)
        s2 = apply_move(s, O, 4)
        self.assertEqual(s2.legal_boards, frozenset({4}))

    def test_given_errors_when_caught_as_value_error_then_kinds_distinct(self):
        kinds = {cls.kind for cls in (PositionOutOfRange, WrongTurn, IllegalBoard, CellOccupied, AlreadyFinished)}
        self.assertEqual(len(kinds), 5)
        with self.assertRaises(ValueError):
            apply_move(new_game(), O, 0)


class TestMirrorRule(unittest.TestCase):
    def test_given_three_x_marks_in_board_zero_when_played_then_board_won_and_game_continues(self):
        s = play_all([1, 9, 2, 18, 0])
        self.assertEqual(s.board.outcome(0), Outcome.won(X))
        self.assertIs(s.board.metaboard[0], X)
        self.assertEqual(s.status, IN_PROGRESS)
        # sent to the closed board 0: free move over every playable board
        self.assertEqual(s.legal_boards, frozenset(range(1, 9)))
        self.assertIs(s.player, O)

    def test_given_playable_target_when_computing_next_boards_then_single_board(self):
        board = Board()
        self.assertEqual(next_legal_boards(board, 5), frozenset({5}))

    def test_given_closed_target_when_computing_next_boards_then_all_playable(self):
        board = _mk_board(['.........', 'XXX......', 'XOXXOOOXX'] + ['.........'] * 6)
        self.assertEqual(next_legal_boards(board, 1), frozenset({0, 3, 4, 5, 6, 7, 8}))
        self.assertEqual(next_legal_boards(board, 2), frozenset({0, 3, 4, 5, 6, 7, 8}))

    def test_given_long_scripted_game_when_played_then_rule_and_invariants_hold(self):
        s = new_game()
        step = 0
        while not s.is_over():
            moves = legal_moves(s)
            self.assertTrue(moves)
            p = moves[(step * 7) % len(moves)]
            mover = s.player
            ns = apply_move(s, mover, p)
            if ns.is_over():
                self.assertEqual(ns.legal_boards, frozenset())
                if ns.status.winner is not None:
                    self.assertIs(ns.status.winner, mover)
            else:
                target = p % 9
                if ns.board.is_playable(target):
                    self.assertEqual(ns.legal_boards, frozenset({target}))
                else:
                    self.assertEqual(ns.legal_boards, ns.board.playable_boards())
                self.assertTrue(ns.legal_boards <= ns.board.playable_boards())
                self.assertIs(ns.player, mover.opponent())
            s = ns
            step += 1
        self.assertLessEqual(step, 81)


class TestTerminalStates(unittest.TestCase):
    def test_given_metaboard_diagonal_when_game_played_out_then_x_wins_and_further_moves_rejected(self):
        s = play_all(DIAGONAL_WIN[:-1])
        self.assertEqual(s.status, IN_PROGRESS)
        self.assertEqual(s.legal_boards, frozenset({8}))

        final = apply_move(s, X, DIAGONAL_WIN[-1])
        self.assertEqual(final.status, Status.won(X))
        self.assertTrue(final.is_over())
        self.assertEqual(final.board.metaboard[0], X)
        self.assertEqual(final.board.metaboard[4], X)
        self.assertEqual(final.board.metaboard[8], X)
        self.assertEqual(legal_moves(final), [])

        for player in (X, O):
            with self.assertRaises(AlreadyFinished):
                apply_move(final, player, 3)

    def test_given_last_open_board_drawn_when_played_then_tied(self):
        board = _mk_board([
            'XXX......', 'OOO......', 'XXX......',
            'XXX......', 'OOO......', 'OOO......',
            'OOO......', 'XXX......', 'XOXXOOOX.',
        ])
        s = GameState(board=board, player=X, legal_boards=frozenset({8}))
        final = apply_move(s, X, 80)
        self.assertEqual(final.status, TIED)
        self.assertEqual(final.legal_boards, frozenset())
        self.assertIs(final.player, X)
        with self.assertRaises(AlreadyFinished):
            apply_move(final, X, 3)

    def test_given_winner_who_did_not_move_when_detected_then_runtime_error(self):
        # corrupt position: O already owns the metaboard diagonal but the game is still running
        board = _mk_board([
            'OOO......', '.........', '.........',
            '.........', 'OOO......', '.........',
            '.........', '.........', 'OOO......',
        ])
        s = GameState(board=board, player=X, legal_boards=frozenset({2}))
        with self.assertRaises(RuntimeError):
            apply_move(s, X, 18)


class TestDebugTrace(unittest.TestCase):
    def test_given_debug_env_when_board_won_then_trace_printed(self):
        buf = io.StringIO()
        with mock.patch.dict(os.environ, {"STTT_DEBUG": "1"}), redirect_stdout(buf):
            play_all([1, 9, 2, 18, 0])
        out = buf.getvalue()
        self.assertIn("[sttt] X wins board 0!!", out)
        self.assertIn("[sttt] Valid boards: [1, 2, 3, 4, 5, 6, 7, 8]", out)

    def test_given_no_debug_env_when_playing_then_silent(self):
        buf = io.StringIO()
        with mock.patch.dict(os.environ, {"STTT_DEBUG": "0"}), redirect_stdout(buf):
            play_all([1, 9, 2, 18, 0])
        self.assertEqual(buf.getvalue(), "")


if __name__ == '__main__':
    unittest.main(verbosity=2)
