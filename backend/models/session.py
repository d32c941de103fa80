from dataclasses import dataclass, field
from enum import StrEnum

from checkers.board import Grid


class SessionPhase(StrEnum):
    EMPTY = "empty"
    WAITING_FOR_OPPONENT = "waiting_for_opponent"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass
class SessionSnapshot:
    phase: SessionPhase
    turn: int                              # player allowed to move next (1 or 2)
    board: Grid
    players: list[int] = field(default_factory=list)   # occupied slots
    winner: int | None = None
