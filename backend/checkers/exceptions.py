"""Errors raised by the checkers domain and the session layer."""


class CheckersError(Exception):
    """Base class. Nothing in this hierarchy is fatal to the server process."""


class RoomFullError(CheckersError):
    """Both player slots are already occupied."""


class NotSeatedError(CheckersError):
    """The connection does not occupy a slot in the session."""


class MalformedMessageError(CheckersError):
    """Inbound frame could not be decoded into a known message."""


class MoveRejectedError(CheckersError):
    """A move request was refused. The session state is left untouched."""

    reason = "rejected"


class NotYourTurnError(MoveRejectedError):
    reason = "notYourTurn"


class IllegalMoveError(MoveRejectedError):
    reason = "illegalMove"


class GameStateError(MoveRejectedError):
    """Move attempted while no game is in progress."""

    reason = "gameNotInProgress"
