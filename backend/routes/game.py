"""Read-only game status for polling / debugging. GET /api/game."""

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

from models.session import SessionPhase
from services.checkers_session import CheckersSession

router = APIRouter(tags=["game"])
logger = logging.getLogger(__name__)


class GameStateResponse(BaseModel):
    phase: SessionPhase
    turn: int
    board: list[list[int | None]]
    players: list[int]
    winner: int | None = None


@router.get("/game", response_model=GameStateResponse, status_code=200)
def get_game(request: Request) -> GameStateResponse:
    """Current phase, turn, board and occupied slots of the room."""
    session: CheckersSession = request.app.state.checkers_session
    snapshot = session.snapshot()
    logger.debug("[game] GET /api/game phase=%s turn=%d", snapshot.phase, snapshot.turn)
    return GameStateResponse(
        phase=snapshot.phase,
        turn=snapshot.turn,
        board=snapshot.board,
        players=snapshot.players,
        winner=snapshot.winner,
    )
