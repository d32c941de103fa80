"""
WebSocket protocol: JSON text frames discriminated by their `type` field.

Field names travel in camelCase (`currentPlayer`, `fromRow`, ...), the
Python side uses snake_case.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from checkers.board import BOARD_SIZE, Board, Grid, Move
from checkers.exceptions import MalformedMessageError

PlayerNumber = Literal[1, 2]
WireCell = Literal[1, 2] | None
WireGrid = Annotated[
    list[Annotated[list[WireCell], Field(min_length=BOARD_SIZE, max_length=BOARD_SIZE)]],
    Field(min_length=BOARD_SIZE, max_length=BOARD_SIZE),
]


class _Message(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- INBOUND ---
class MoveMessage(_Message):
    """
    A move proposal. Two encodings are accepted:

    * explicit coordinates: fromRow, fromCol, toRow, toCol
    * a full board snapshot after the move (what the browser client sends),
      either as a grid or as a JSON string of the grid
    """

    type: Literal["move"]
    from_row: StrictInt | None = None
    from_col: StrictInt | None = None
    to_row: StrictInt | None = None
    to_col: StrictInt | None = None
    board: WireGrid | None = None

    @field_validator("board", mode="before")
    @classmethod
    def decode_board_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"board is not valid JSON: {e.msg}") from e
        return value

    @model_validator(mode="after")
    def require_move_or_board(self) -> MoveMessage:
        coordinates = (self.from_row, self.from_col, self.to_row, self.to_col)
        if all(c is not None for c in coordinates):
            return self
        if any(c is not None for c in coordinates):
            raise ValueError("fromRow, fromCol, toRow and toCol must be given together")
        if self.board is None:
            raise ValueError("move needs either coordinates or a board snapshot")
        return self

    def explicit_move(self) -> Move | None:
        if self.from_row is None or self.from_col is None or self.to_row is None or self.to_col is None:
            return None
        return Move.from_coordinates(self.from_row, self.from_col, self.to_row, self.to_col)

    def snapshot(self) -> Board | None:
        return Board.from_grid(self.board) if self.board is not None else None


class ResetGameMessage(_Message):
    type: Literal["resetGame"]


class GameEndMessage(_Message):
    type: Literal["gameEnd"]
    winner: PlayerNumber


InboundMessage = Annotated[
    Union[MoveMessage, ResetGameMessage, GameEndMessage],
    Field(discriminator="type"),
]
_inbound_adapter: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_inbound(raw: str | bytes) -> MoveMessage | ResetGameMessage | GameEndMessage:
    try:
        return _inbound_adapter.validate_json(raw)
    except ValidationError as e:
        raise MalformedMessageError(
            f"Cannot interpret message: {e.error_count()} error(s), first: {e.errors()[0]['msg']}"
        ) from e


# --- OUTBOUND ---
class PlayerNumberEvent(_Message):
    type: Literal["playerNumber"] = "playerNumber"
    number: PlayerNumber


class WaitingForOpponentEvent(_Message):
    type: Literal["waitingForOpponent"] = "waitingForOpponent"


class StartGameEvent(_Message):
    type: Literal["startGame"] = "startGame"


class OpponentMoveEvent(_Message):
    """Board travels as a JSON string of the grid, as the browser client expects."""

    type: Literal["opponentMove"] = "opponentMove"
    board: str
    current_player: PlayerNumber

    @classmethod
    def from_board(cls, board: Board, current_player: int) -> OpponentMoveEvent:
        return cls(
            board=json.dumps(board.to_grid(), separators=(",", ":")),
            current_player=int(current_player),
        )

    def grid(self) -> Grid:
        return json.loads(self.board)


class ResetGameEvent(_Message):
    type: Literal["resetGame"] = "resetGame"


class GameEndEvent(_Message):
    type: Literal["gameEnd"] = "gameEnd"
    winner: PlayerNumber


class PlayerDisconnectedEvent(_Message):
    type: Literal["playerDisconnected"] = "playerDisconnected"
    player: PlayerNumber


class RoomFullEvent(_Message):
    type: Literal["roomFull"] = "roomFull"


class MoveRejectedEvent(_Message):
    type: Literal["moveRejected"] = "moveRejected"
    reason: str
    detail: str = ""


OutboundMessage = (
    PlayerNumberEvent
    | WaitingForOpponentEvent
    | StartGameEvent
    | OpponentMoveEvent
    | ResetGameEvent
    | GameEndEvent
    | PlayerDisconnectedEvent
    | RoomFullEvent
    | MoveRejectedEvent
)


def encode(event: OutboundMessage) -> dict[str, Any]:
    return event.model_dump(by_alias=True)
