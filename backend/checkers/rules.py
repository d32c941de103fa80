"""
Rule engine: the single authority on whether a requested move is accepted.

Stateless. It receives the current board and turn, and returns the resulting
state for the caller (the session) to store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from checkers.board import (
    Board,
    Move,
    Player,
    Square,
    apply_move,
    is_legal_move,
    jump_moves,
    winner,
)
from checkers.exceptions import IllegalMoveError, NotYourTurnError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppliedMove:
    move: Move
    player: Player
    board: Board
    next_turn: Player
    captured: Square | None = None


def try_move(
    board: Board,
    turn: Player,
    requester: Player,
    move: Move,
    *,
    mandatory_jump: bool = True,
) -> AppliedMove:
    """
    Validate and apply a move request.
    ----

    1. The requester must be the player whose turn it is.
    2. The move must be a legal step or jump on the current board.
    3. With `mandatory_jump`, a simple step is refused while any jump is available.
    """
    if requester != turn:
        raise NotYourTurnError(
            f"It is not your turn. Waiting for player {int(turn)} to move first."
        )

    if not is_legal_move(board, requester, move):
        raise IllegalMoveError(f"Move not allowed: {_describe(move)}")

    if mandatory_jump and not move.is_jump and jump_moves(board, requester):
        raise IllegalMoveError(
            f"Move not allowed: {_describe(move)}. A capture is available and must be taken."
        )

    new_board = apply_move(board, move)
    logger.debug("[rules] player=%d applied %s", requester, _describe(move))
    return AppliedMove(
        move=move,
        player=requester,
        board=new_board,
        next_turn=requester.opponent,
        captured=move.jumped_square,
    )


def game_result(board: Board, next_turn: Player) -> Player | None:
    """Winner after an accepted move, or None while the game goes on."""
    return winner(board, next_turn)


def _describe(move: Move) -> str:
    source, target = move.from_square, move.to_square
    return f"({source.row},{source.col})->({target.row},{target.col})"
