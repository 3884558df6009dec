from typing import List

import pytest
from hypothesis import given, strategies as st

from game.engine import (
    WIN_CHECK_AXES,
    MoveResult,
    Outcome,
    Player,
    apply_move,
    format_board,
    is_draw,
    move_result,
    new_board,
    next_player,
    status,
    winner,
    winning_line,
)

boards = st.lists(st.sampled_from(list(Player)), min_size=9, max_size=9).map(tuple)


def board_from(rows: List[str]):
    return tuple(Player(cell) for cell in "".join(rows))


@given(boards)
def test_winner_iff_uniform_triple(board):
    uniform = [axis for axis in WIN_CHECK_AXES
               if board[axis[0]] != Player.NONE and board[axis[0]] == board[axis[1]] == board[axis[2]]]
    if uniform:
        assert winner(board) == board[uniform[0][0]]
        assert winning_line(board) == uniform[0]
    else:
        assert winner(board) is None
        assert winning_line(board) is None


@given(boards)
def test_draw_iff_full_without_winner(board):
    assert is_draw(board) == (Player.NONE not in board and winner(board) is None)


@given(boards, st.integers(min_value=0, max_value=8))
def test_occupied_or_won_board_rejects_move(board, index):
    result = apply_move(board, index, Player.X)
    if board[index] != Player.NONE or winner(board) is not None:
        assert result is None
    else:
        assert result[index] == Player.X
        assert [c for i, c in enumerate(result) if i != index] == [c for i, c in enumerate(board) if i != index]


def test_new_board_is_empty():
    board = new_board()
    assert len(board) == 9
    assert set(board) == {Player.NONE}


def test_apply_move_leaves_input_untouched():
    board = new_board()
    after = apply_move(board, 4, Player.O)
    assert board == new_board()
    assert after[4] == Player.O


def test_apply_move_on_occupied_cell():
    board = apply_move(new_board(), 0, Player.X)
    assert apply_move(board, 0, Player.O) is None


def test_apply_move_after_win():
    board = board_from(["XXX", "OO ", "   "])
    assert apply_move(board, 5, Player.O) is None


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_apply_move_index_out_of_range(index):
    with pytest.raises(ValueError):
        apply_move(new_board(), index, Player.X)


def test_apply_move_empty_mark():
    with pytest.raises(ValueError):
        apply_move(new_board(), 0, Player.NONE)


def test_diagonal_win_scenario():
    board = new_board()
    for index, player in ((0, Player.X), (1, Player.O), (4, Player.X), (2, Player.O), (8, Player.X)):
        board = apply_move(board, index, player)

    assert winner(board) == Player.X
    assert winning_line(board) == (0, 4, 8)
    assert status(board).label == "Winner: X"
    assert move_result(board) == MoveResult.WIN_X


def test_full_board_draw_scenario():
    board = board_from(["XOX", "XOO", "OXX"])
    assert winner(board) is None
    assert is_draw(board)
    assert status(board).outcome == Outcome.DRAW
    assert status(board).label == "Draw! No one wins."
    assert move_result(board) == MoveResult.DRAW


def test_first_axis_in_order_wins():
    board = board_from(["XXX", "X  ", "X  "])
    assert winning_line(board) == (0, 1, 2)


def test_o_win_result():
    board = board_from(["XX ", "OOO", "X  "])
    assert move_result(board) == MoveResult.WIN_O
    assert status(board).player == Player.O


def test_next_player_from_mark_count():
    assert next_player(new_board()) == Player.X
    board = apply_move(new_board(), 3, Player.X)
    assert next_player(board) == Player.O
    assert status(board).label == "Next player: O"
    assert move_result(board) == MoveResult.NONE


def test_status_override_player():
    assert status(new_board(), Player.O).player == Player.O


def test_format_board():
    board = board_from(["X O", "   ", "  X"])
    assert format_board(board) == ["X O", "   ", "  X"]
