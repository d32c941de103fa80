from .board import (
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
    jump_moves,
    legal_moves,
    piece_count,
    winner,
)
from .rules import AppliedMove, game_result, try_move

__all__ = [
    "BOARD_SIZE",
    "AppliedMove",
    "Board",
    "Move",
    "Player",
    "Square",
    "apply_move",
    "game_result",
    "has_any_legal_move",
    "infer_move",
    "initial_board",
    "is_legal_move",
    "jump_moves",
    "legal_moves",
    "piece_count",
    "try_move",
    "winner",
]
