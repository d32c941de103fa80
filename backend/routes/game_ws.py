from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket

from services.relay import serve_player

logger = logging.getLogger(__name__)


async def ws_game(websocket: WebSocket) -> None:
    """
    Player connection for the checkers room.

    Inbound frames:  {"type": "move", ...} | {"type": "resetGame"} | {"type": "gameEnd", "winner": 1|2}
    Outbound frames: playerNumber, waitingForOpponent, startGame, opponentMove,
                     resetGame, gameEnd, playerDisconnected, roomFull (and moveRejected if enabled)
    """
    settings = websocket.app.state.settings
    await serve_player(
        websocket,
        websocket.app.state.checkers_session,
        notify_rejections=settings.notify_rejections,
    )


def create_router(path: str = "/ws") -> APIRouter:
    router = APIRouter(tags=["game"])
    router.add_api_websocket_route(path, ws_game)
    logger.debug("[game_ws] WebSocket route registered at %s", path)
    return router
