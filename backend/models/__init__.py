from .messages import (
    GameEndEvent,
    GameEndMessage,
    MoveMessage,
    MoveRejectedEvent,
    OpponentMoveEvent,
    OutboundMessage,
    PlayerDisconnectedEvent,
    PlayerNumberEvent,
    ResetGameEvent,
    ResetGameMessage,
    RoomFullEvent,
    StartGameEvent,
    WaitingForOpponentEvent,
    encode,
    parse_inbound,
)
from .session import SessionPhase, SessionSnapshot

__all__ = [
    "SessionPhase",
    "SessionSnapshot",
    "MoveMessage",
    "ResetGameMessage",
    "GameEndMessage",
    "parse_inbound",
    "PlayerNumberEvent",
    "WaitingForOpponentEvent",
    "StartGameEvent",
    "OpponentMoveEvent",
    "ResetGameEvent",
    "GameEndEvent",
    "PlayerDisconnectedEvent",
    "RoomFullEvent",
    "MoveRejectedEvent",
    "OutboundMessage",
    "encode",
]
