"""
Per-connection relay between a player's WebSocket and the checkers session.

One coroutine per connected player: accept, take a slot, then decode inbound
frames and hand them to the session until the socket goes away. Whatever ends
the loop (graceful close, abrupt disconnect, transport error) the slot is
released afterwards.
"""

from __future__ import annotations

import logging

from fastapi import WebSocket, status
from starlette.websockets import WebSocketState

from checkers.exceptions import (
    MalformedMessageError,
    MoveRejectedError,
    NotSeatedError,
    RoomFullError,
)
from models.messages import (
    MoveMessage,
    MoveRejectedEvent,
    OutboundMessage,
    ResetGameMessage,
    RoomFullEvent,
    encode,
    parse_inbound,
)
from services.checkers_session import CheckersSession

logger = logging.getLogger(__name__)


class PlayerConnection:
    """Wraps one accepted WebSocket. Sending is best-effort."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send(self, event: OutboundMessage) -> None:
        if not self.is_open:
            logger.debug("[relay] Skipping %s, socket not open", event.type)
            return
        try:
            await self.websocket.send_json(encode(event))
        except Exception as e:
            logger.warning("[relay] send(%s) failed client=%s: %s", event.type, self.websocket.client, e)

    async def close(
        self,
        code: int = status.WS_1000_NORMAL_CLOSURE,
        reason: str | None = None,
    ) -> None:
        if not self.is_open:
            return
        try:
            await self.websocket.close(code=code, reason=reason)
        except Exception as e:
            logger.warning("[relay] close() failed client=%s: %s", self.websocket.client, e)


async def accept(websocket: WebSocket) -> PlayerConnection | None:
    try:
        await websocket.accept()
    except Exception as e:
        logger.warning("[relay] accept() failed client=%s: %s", websocket.client, e)
        return None
    return PlayerConnection(websocket)


async def serve_player(
    websocket: WebSocket,
    session: CheckersSession,
    *,
    notify_rejections: bool = False,
) -> None:
    logger.info("[relay] Client connecting client=%s", websocket.client)
    connection = await accept(websocket)
    if connection is None:
        return

    try:
        player = await session.join(connection)
    except RoomFullError:
        logger.info("[relay] Room full; refusing client=%s", websocket.client)
        await connection.send(RoomFullEvent())
        await connection.close(reason="Room is full")
        return

    logger.info("[relay] client=%s seated as player=%d", websocket.client, player)
    try:
        await receive_loop(connection, session, notify_rejections=notify_rejections)
    finally:
        await session.leave(connection)
        await connection.close()
        logger.info("[relay] player=%d connection closed", player)


async def receive_loop(
    connection: PlayerConnection,
    session: CheckersSession,
    *,
    notify_rejections: bool = False,
) -> None:
    """Suspend on the next frame until the transport closes or fails."""
    while True:
        try:
            message = await connection.websocket.receive()
        except Exception as e:
            logger.warning("[relay] receive() failed client=%s: %s", connection.websocket.client, e)
            return

        if message["type"] == "websocket.disconnect":
            logger.info(
                "[relay] client=%s disconnected code=%s",
                connection.websocket.client,
                message.get("code"),
            )
            return

        raw = message.get("text")
        if raw is None:
            raw = message.get("bytes") or b""
        await dispatch(connection, session, raw, notify_rejections=notify_rejections)


async def dispatch(
    connection: PlayerConnection,
    session: CheckersSession,
    raw: str | bytes,
    *,
    notify_rejections: bool = False,
) -> None:
    """Decode one frame and hand it to the session. Never raises for bad input."""
    try:
        message = parse_inbound(raw)
    except MalformedMessageError as e:
        logger.warning("[relay] Ignoring message from client=%s: %s", connection.websocket.client, e)
        return

    try:
        if isinstance(message, MoveMessage):
            await session.move(connection, message)
        elif isinstance(message, ResetGameMessage):
            await session.reset(connection)
        else:
            await session.end_game(connection, message.winner)
    except MoveRejectedError as e:
        logger.info("[relay] %s rejected (%s): %s", message.type, e.reason, e)
        if notify_rejections:
            await connection.send(MoveRejectedEvent(reason=e.reason, detail=str(e)))
    except NotSeatedError as e:
        logger.warning("[relay] %s from unseated client=%s: %s", message.type, connection.websocket.client, e)
