from __future__ import annotations

from tictactoe.board import Side, board_from_symbols, empty_board, empty_cells, place, side_to_move
from tictactoe.evaluator import DRAW, Evaluator, Outcome

X, O, _ = "X", "O", None


def test_in_progress_board_has_no_outcome():
    board = place(place(empty_board(), 4, Side.X), 0, Side.O)
    assert Evaluator.evaluate(board) is None


def test_top_row_win():
    board = board_from_symbols([X, X, X, O, O, _, _, _, _])
    assert Evaluator.evaluate(board) == Outcome(winner=Side.X, line=(0, 1, 2))


def test_full_board_without_line_is_draw():
    board = board_from_symbols([X, O, X, X, O, O, O, X, X])
    outcome = Evaluator.evaluate(board)
    assert outcome == DRAW
    assert outcome.is_draw and outcome.line is None


def test_column_and_diagonal_wins():
    column = board_from_symbols([X, O, X, _, O, X, _, O, _])
    assert Evaluator.evaluate(column) == Outcome(winner=Side.O, line=(1, 4, 7))

    anti_diagonal = board_from_symbols([O, O, X, _, X, _, X, _, _])
    assert Evaluator.evaluate(anti_diagonal) == Outcome(winner=Side.X, line=(2, 4, 6))


def test_win_on_last_cell_is_not_a_draw():
    board = board_from_symbols([X, O, X, O, X, O, O, X, X])
    outcome = Evaluator.evaluate(board)
    assert outcome.winner is Side.X
    assert outcome.line == (0, 4, 8)


def _lines_by_hand(board):
    lines = [tuple(range(r * 3, r * 3 + 3)) for r in range(3)]
    lines += [(c, c + 3, c + 6) for c in range(3)]
    lines += [(0, 4, 8), (2, 4, 6)]
    return [line for line in lines if board[line[0]] is not None and len({board[i] for i in line}) == 1]


def test_every_reachable_board_matches_a_manual_check():
    seen = set()

    def walk(board):
        if board in seen:
            return
        seen.add(board)
        outcome = Evaluator.evaluate(board)
        complete = _lines_by_hand(board)
        if complete:
            assert outcome is not None and not outcome.is_draw
            assert outcome.line in complete
            assert outcome.winner is board[outcome.line[0]]
            return
        if not empty_cells(board):
            assert outcome == DRAW
            return
        assert outcome is None
        side = side_to_move(board)
        for index in empty_cells(board):
            walk(place(board, index, side))

    walk(empty_board())
    assert len(seen) == 5478
