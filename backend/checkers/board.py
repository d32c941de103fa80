"""
Board model for 8x8 checkers.

Rows are indexed 0-7 from the top of the board. Player TWO starts on rows 0-2
and moves down (increasing row), player ONE starts on rows 5-7 and moves up.
Pieces only ever stand on dark squares, i.e. (row + col) is odd.

Only single forward steps and single forward jumps exist here: no kings, no
chained captures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Self

from checkers.exceptions import IllegalMoveError

BOARD_SIZE = 8
# rows filled with pieces at the start, per side
HOME_ROWS = 3


class Player(IntEnum):
    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE

    @property
    def forward(self) -> int:
        """Row direction this player's pieces travel in."""
        return -1 if self is Player.ONE else 1


Cell = Player | None
# Wire representation of a board: null / 1 / 2 per cell
Grid = list[list[int | None]]


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def is_dark(self) -> bool:
        return (self.row + self.col) % 2 == 1

    def offset(self, rows: int, cols: int) -> Square:
        return Square(self.row + rows, self.col + cols)


@dataclass(frozen=True)
class Move:
    from_square: Square
    to_square: Square

    @classmethod
    def from_coordinates(cls, from_row: int, from_col: int, to_row: int, to_col: int) -> Self:
        return cls(Square(from_row, from_col), Square(to_row, to_col))

    @property
    def row_delta(self) -> int:
        return self.to_square.row - self.from_square.row

    @property
    def col_delta(self) -> int:
        return self.to_square.col - self.from_square.col

    @property
    def is_jump(self) -> bool:
        return abs(self.row_delta) == 2

    @property
    def jumped_square(self) -> Square | None:
        if not self.is_jump:
            return None
        return Square(
            (self.from_square.row + self.to_square.row) // 2,
            (self.from_square.col + self.to_square.col) // 2,
        )


@dataclass(frozen=True)
class Board:
    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in self.cells):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")

    @classmethod
    def empty(cls) -> Self:
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_grid(cls, grid: Grid) -> Self:
        """Build a board from the wire grid (rows of null / 1 / 2)."""
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        return cls(
            tuple(
                tuple(None if value is None else Player(value) for value in row)
                for row in grid
            )
        )

    @classmethod
    def with_pieces(cls, pieces: dict[Square, Player]) -> Self:
        """Convenience constructor for hand-built positions."""
        return cls.empty().replace(pieces)

    def to_grid(self) -> Grid:
        return [[None if cell is None else int(cell) for cell in row] for row in self.cells]

    def piece(self, square: Square) -> Cell:
        return self.cells[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def squares(self) -> Iterator[Square]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield Square(row, col)

    def locate(self, player: Player) -> list[Square]:
        return [square for square in self.squares() if self.piece(square) == player]

    def replace(self, changes: dict[Square, Cell]) -> Board:
        """New board with the given squares overwritten."""
        rows = [list(row) for row in self.cells]
        for square, cell in changes.items():
            rows[square.row][square.col] = cell
        return Board(tuple(tuple(row) for row in rows))


def initial_board() -> Board:
    pieces: dict[Square, Player] = {}
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            square = Square(row, col)
            if not square.is_dark():
                continue
            if row < HOME_ROWS:
                pieces[square] = Player.TWO
            elif row >= BOARD_SIZE - HOME_ROWS:
                pieces[square] = Player.ONE
    return Board.with_pieces(pieces)


def is_legal_move(board: Board, mover: Player, move: Move) -> bool:
    """
    Shape and occupancy check for a single move.
    ----

    * both squares on the board, the source holds one of the mover's pieces
    * the destination is empty
    * a one-row step forward and one column sideways, or
    * a two-row jump forward and two columns sideways over an opponent piece

    Whether a jump was mandatory is left to the rule engine.
    """
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return False
    if board.piece(move.from_square) != mover:
        return False
    if not board.is_empty(move.to_square):
        return False

    if move.row_delta == mover.forward and abs(move.col_delta) == 1:
        return True

    if move.row_delta == 2 * mover.forward and abs(move.col_delta) == 2:
        jumped = move.jumped_square
        return jumped is not None and board.piece(jumped) == mover.opponent

    return False


def apply_move(board: Board, move: Move) -> Board:
    changes: dict[Square, Cell] = {
        move.from_square: None,
        move.to_square: board.piece(move.from_square),
    }
    jumped = move.jumped_square
    if jumped is not None:
        changes[jumped] = None
    return board.replace(changes)


def _candidate_moves(square: Square, player: Player, distance: int) -> list[Move]:
    return [
        Move(square, square.offset(distance * player.forward, distance * side))
        for side in (-1, 1)
    ]


def jump_moves(board: Board, player: Player) -> list[Move]:
    return [
        move
        for square in board.locate(player)
        for move in _candidate_moves(square, player, 2)
        if is_legal_move(board, player, move)
    ]


def legal_moves(board: Board, player: Player) -> list[Move]:
    """Every simple step and jump available to the player (jumps last)."""
    steps = [
        move
        for square in board.locate(player)
        for move in _candidate_moves(square, player, 1)
        if is_legal_move(board, player, move)
    ]
    return steps + jump_moves(board, player)


def has_any_legal_move(board: Board, player: Player) -> bool:
    return bool(legal_moves(board, player))


def piece_count(board: Board, player: Player) -> int:
    return len(board.locate(player))


def winner(board: Board, player_to_move_next: Player) -> Player | None:
    """A side without pieces loses, as does the side to move when it is stuck."""
    for player in Player:
        if piece_count(board, player) == 0:
            return player.opponent
    if not has_any_legal_move(board, player_to_move_next):
        return player_to_move_next.opponent
    return None


def infer_move(before: Board, after: Board, player: Player) -> Move:
    """
    Recover the move a client made from its full board snapshot.

    The snapshot must differ from `before` by exactly one legal move of `player`;
    anything else (extra pieces, touched opponent pieces elsewhere, ...) is rejected.
    """
    vacated = [
        square
        for square in before.locate(player)
        if after.piece(square) is None
    ]
    arrived = [
        square
        for square in after.locate(player)
        if before.piece(square) is None
    ]
    if len(vacated) != 1 or len(arrived) != 1:
        raise IllegalMoveError(
            f"Board snapshot does not describe a single move for player {int(player)}."
        )

    move = Move(vacated[0], arrived[0])
    if not is_legal_move(before, player, move) or apply_move(before, move) != after:
        raise IllegalMoveError(
            f"Board snapshot is not reachable with one legal move for player {int(player)}."
        )
    return move
