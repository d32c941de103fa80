"""Unit tests for checkers/board.py"""

from itertools import product

import pytest

from checkers.board import (
    BOARD_SIZE,
    Board,
    Move,
    Player,
    Square,
    apply_move,
    has_any_legal_move,
    infer_move,
    initial_board,
    is_legal_move,
    legal_moves,
    piece_count,
    winner,
)
from checkers.exceptions import IllegalMoveError

ALL_SQUARES = [Square(row, col) for row, col in product(range(BOARD_SIZE), repeat=2)]


def _move(from_row: int, from_col: int, to_row: int, to_col: int) -> Move:
    return Move.from_coordinates(from_row, from_col, to_row, to_col)


def _brute_force_has_move(board: Board, player: Player) -> bool:
    """Try every (source, destination) pair on the board."""
    return any(
        is_legal_move(board, player, Move(source, target))
        for source in board.locate(player)
        for target in ALL_SQUARES
    )


# -- INITIAL SETUP --
def test_initial_board_piece_placement() -> None:
    board = initial_board()

    assert piece_count(board, Player.ONE) == 12
    assert piece_count(board, Player.TWO) == 12
    for square in ALL_SQUARES:
        piece = board.piece(square)
        if not square.is_dark() or square.row in (3, 4):
            assert piece is None
        elif square.row <= 2:
            assert piece == Player.TWO
        else:
            assert piece == Player.ONE


def test_initial_board_is_deterministic() -> None:
    assert initial_board() == initial_board()


def test_board_rejects_wrong_dimensions() -> None:
    with pytest.raises(ValueError):
        Board.from_grid([[None] * BOARD_SIZE] * (BOARD_SIZE - 1))
    with pytest.raises(ValueError):
        Board.from_grid([[None] * (BOARD_SIZE + 1)] * BOARD_SIZE)


def test_grid_conversion_uses_wire_values() -> None:
    grid = initial_board().to_grid()
    assert grid[0][1] == 2
    assert grid[7][0] == 1
    assert grid[3][0] is None
    assert Board.from_grid(grid) == initial_board()


# -- MOVE LEGALITY --
@pytest.mark.parametrize(
    ("move", "expected"),
    [
        (_move(4, 3, 3, 2), True),   # forward left
        (_move(4, 3, 3, 4), True),   # forward right
        (_move(4, 3, 5, 2), False),  # backward
        (_move(4, 3, 5, 4), False),  # backward
        (_move(4, 3, 3, 3), False),  # straight
        (_move(4, 3, 4, 5), False),  # sideways
        (_move(4, 3, 2, 5), False),  # jump with nothing to capture
        (_move(4, 3, 1, 6), False),  # three squares
    ],
)
def test_player_one_simple_moves(move: Move, expected: bool) -> None:
    board = Board.with_pieces({Square(4, 3): Player.ONE})
    assert is_legal_move(board, Player.ONE, move) is expected


def test_player_two_moves_towards_higher_rows() -> None:
    board = Board.with_pieces({Square(2, 3): Player.TWO})
    assert is_legal_move(board, Player.TWO, _move(2, 3, 3, 2))
    assert is_legal_move(board, Player.TWO, _move(2, 3, 3, 4))
    assert not is_legal_move(board, Player.TWO, _move(2, 3, 1, 2))


def test_jump_over_opponent_piece() -> None:
    board = Board.with_pieces({Square(5, 2): Player.ONE, Square(4, 3): Player.TWO})
    assert is_legal_move(board, Player.ONE, _move(5, 2, 3, 4))


def test_cannot_jump_over_own_piece() -> None:
    board = Board.with_pieces({Square(5, 2): Player.ONE, Square(4, 3): Player.ONE})
    assert not is_legal_move(board, Player.ONE, _move(5, 2, 3, 4))


def test_destination_must_be_empty() -> None:
    board = Board.with_pieces(
        {Square(5, 2): Player.ONE, Square(4, 3): Player.TWO, Square(3, 4): Player.TWO}
    )
    assert not is_legal_move(board, Player.ONE, _move(5, 2, 3, 4))
    assert not is_legal_move(board, Player.ONE, _move(5, 2, 4, 3))


def test_destination_must_be_on_the_board() -> None:
    board = Board.with_pieces({Square(4, 0): Player.ONE, Square(0, 7): Player.TWO})
    assert not is_legal_move(board, Player.ONE, _move(4, 0, 3, -1))
    assert not is_legal_move(board, Player.TWO, _move(0, 7, 1, 8))


def test_can_only_move_own_pieces() -> None:
    board = initial_board()
    assert not is_legal_move(board, Player.TWO, _move(5, 0, 4, 1))
    assert not is_legal_move(board, Player.ONE, _move(4, 1, 3, 2))  # empty source


# -- APPLYING MOVES --
def test_apply_simple_move_returns_new_board() -> None:
    board = initial_board()
    after = apply_move(board, _move(5, 0, 4, 1))

    assert after.piece(Square(5, 0)) is None
    assert after.piece(Square(4, 1)) == Player.ONE
    # input board untouched
    assert board.piece(Square(5, 0)) == Player.ONE
    assert board.piece(Square(4, 1)) is None


def test_jump_captures_exactly_one_opponent_piece() -> None:
    board = Board.with_pieces(
        {Square(5, 2): Player.ONE, Square(4, 3): Player.TWO, Square(0, 1): Player.TWO}
    )
    after = apply_move(board, _move(5, 2, 3, 4))

    assert after.piece(Square(4, 3)) is None
    assert after.piece(Square(3, 4)) == Player.ONE
    assert piece_count(after, Player.TWO) == piece_count(board, Player.TWO) - 1
    assert piece_count(after, Player.ONE) == piece_count(board, Player.ONE)


def test_move_jump_properties() -> None:
    jump = _move(5, 2, 3, 4)
    step = _move(5, 2, 4, 3)
    assert jump.is_jump and jump.jumped_square == Square(4, 3)
    assert not step.is_jump and step.jumped_square is None


# -- AVAILABLE MOVES --
HAND_BUILT_BOARDS = {
    "initial": initial_board(),
    "lone piece on far row": Board.with_pieces({Square(0, 1): Player.ONE, Square(7, 0): Player.TWO}),
    "blocked diagonal": Board.with_pieces(
        {Square(5, 0): Player.ONE, Square(4, 1): Player.TWO, Square(3, 2): Player.TWO}
    ),
    "jump only": Board.with_pieces(
        {
            Square(5, 2): Player.ONE,
            Square(4, 1): Player.TWO,
            Square(4, 3): Player.TWO,
            Square(3, 0): Player.TWO,
        }
    ),
    "empty": Board.empty(),
}


@pytest.mark.parametrize("name", list(HAND_BUILT_BOARDS))
@pytest.mark.parametrize("player", list(Player))
def test_has_any_legal_move_matches_enumeration(name: str, player: Player) -> None:
    board = HAND_BUILT_BOARDS[name]
    assert has_any_legal_move(board, player) is _brute_force_has_move(board, player)


def test_piece_on_last_row_has_no_move() -> None:
    board = HAND_BUILT_BOARDS["lone piece on far row"]
    assert not has_any_legal_move(board, Player.ONE)
    assert not has_any_legal_move(board, Player.TWO)


def test_blocked_piece_has_no_move() -> None:
    board = HAND_BUILT_BOARDS["blocked diagonal"]
    assert not has_any_legal_move(board, Player.ONE)
    assert has_any_legal_move(board, Player.TWO)


def test_legal_moves_lists_steps_and_jumps() -> None:
    board = HAND_BUILT_BOARDS["jump only"]
    assert legal_moves(board, Player.ONE) == [_move(5, 2, 3, 4)]


def test_initial_position_has_seven_moves_per_side() -> None:
    board = initial_board()
    assert len(legal_moves(board, Player.ONE)) == 7
    assert len(legal_moves(board, Player.TWO)) == 7


# -- WINNER --
def test_no_winner_at_start() -> None:
    assert winner(initial_board(), Player.ONE) is None


def test_player_without_pieces_loses() -> None:
    board = Board.with_pieces({Square(3, 4): Player.ONE})
    assert winner(board, Player.TWO) == Player.ONE
    assert winner(board, Player.ONE) == Player.ONE


def test_stuck_player_to_move_loses() -> None:
    board = HAND_BUILT_BOARDS["blocked diagonal"]
    assert winner(board, Player.ONE) == Player.TWO
    # TWO can still move, so nothing is decided when it is TWO's turn
    assert winner(board, Player.TWO) is None


# -- SNAPSHOT INFERENCE --
def test_infer_simple_move_from_snapshot() -> None:
    before = initial_board()
    move = _move(5, 0, 4, 1)
    assert infer_move(before, apply_move(before, move), Player.ONE) == move


def test_infer_jump_from_snapshot() -> None:
    before = Board.with_pieces({Square(5, 2): Player.ONE, Square(4, 3): Player.TWO})
    move = _move(5, 2, 3, 4)
    assert infer_move(before, apply_move(before, move), Player.ONE) == move


def test_infer_rejects_two_moves() -> None:
    before = initial_board()
    after = apply_move(apply_move(before, _move(5, 0, 4, 1)), _move(5, 2, 4, 3))
    with pytest.raises(IllegalMoveError):
        infer_move(before, after, Player.ONE)


def test_infer_rejects_illegal_shape() -> None:
    before = initial_board()
    after = before.replace({Square(5, 0): None, Square(3, 2): Player.ONE})
    with pytest.raises(IllegalMoveError):
        infer_move(before, after, Player.ONE)


def test_infer_rejects_tampered_opponent_pieces() -> None:
    before = initial_board()
    after = apply_move(before, _move(5, 0, 4, 1)).replace({Square(0, 1): None})
    with pytest.raises(IllegalMoveError):
        infer_move(before, after, Player.ONE)


def test_infer_rejects_unchanged_board() -> None:
    with pytest.raises(IllegalMoveError):
        infer_move(initial_board(), initial_board(), Player.ONE)
