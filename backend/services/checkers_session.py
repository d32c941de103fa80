from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from checkers.board import Board, Player, infer_move, initial_board
from checkers.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotSeatedError,
    NotYourTurnError,
    RoomFullError,
)
from checkers.rules import AppliedMove, game_result, try_move
from models.messages import (
    GameEndEvent,
    MoveMessage,
    OpponentMoveEvent,
    OutboundMessage,
    PlayerDisconnectedEvent,
    PlayerNumberEvent,
    ResetGameEvent,
    StartGameEvent,
    WaitingForOpponentEvent,
)
from models.session import SessionPhase, SessionSnapshot

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Anything the session can push events to. send() must not raise."""

    async def send(self, event: OutboundMessage) -> None: ...


class CheckersSession:
    """
    The single two-player room and its authoritative game state.

    - Two slots, filled lowest number first. A third connection is refused.
    - Every mutation runs under one asyncio.Lock; events are delivered while the
      lock is held, so both players observe them in the order the state changed.
    - The board and turn only change through the rule engine.
    """

    def __init__(self, *, mandatory_jump: bool = True) -> None:
        self._lock = asyncio.Lock()
        self._slots: dict[Player, Connection | None] = {Player.ONE: None, Player.TWO: None}
        self._mandatory_jump = mandatory_jump
        self._board: Board = initial_board()
        self._turn: Player = Player.ONE
        self._phase: SessionPhase = SessionPhase.EMPTY
        self._winner: Player | None = None

    @property
    def board(self) -> Board:
        return self._board

    @property
    def turn(self) -> Player:
        return self._turn

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def winner(self) -> Player | None:
        return self._winner

    def player_of(self, connection: Connection) -> Player | None:
        return next(
            (player for player, seated in self._slots.items() if seated is connection),
            None,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self._phase,
            turn=int(self._turn),
            board=self._board.to_grid(),
            players=[int(player) for player, seated in self._slots.items() if seated is not None],
            winner=int(self._winner) if self._winner is not None else None,
        )

    # -- OPERATIONS --
    async def join(self, connection: Connection) -> Player:
        async with self._lock:
            seated = self.player_of(connection)
            if seated is not None:
                return seated

            player = next((p for p, seat in self._slots.items() if seat is None), None)
            if player is None:
                raise RoomFullError("Both player slots are occupied.")

            self._slots[player] = connection
            logger.info("[session] player=%d joined", player)
            await connection.send(PlayerNumberEvent(number=int(player)))

            if self._is_full():
                self._new_game()
                self._phase = SessionPhase.IN_PROGRESS
                logger.info("[session] Both slots filled; game started")
                await self._broadcast(StartGameEvent())
            else:
                self._phase = SessionPhase.WAITING_FOR_OPPONENT
                await connection.send(WaitingForOpponentEvent())
            return player

    async def move(self, connection: Connection, request: MoveMessage) -> AppliedMove:
        """
        Attempt a move on behalf of the connection's slot.

        Rejections raise a MoveRejectedError subclass and leave the state untouched.
        On success the opponent gets the new board; if the move decided the game,
        both players get gameEnd.
        """
        async with self._lock:
            player = self._require_seat(connection)
            if self._phase != SessionPhase.IN_PROGRESS:
                raise GameStateError(f"Game is not in progress. phase: {self._phase}")

            move = request.explicit_move()
            if move is None:
                # the browser client sends the whole board after its move
                if player != self._turn:
                    raise NotYourTurnError(
                        f"It is not your turn. Waiting for player {int(self._turn)} to move first."
                    )
                snapshot = request.snapshot()
                if snapshot is None:
                    raise IllegalMoveError("Move carries neither coordinates nor a board.")
                move = infer_move(self._board, snapshot, player)

            applied = try_move(
                self._board,
                self._turn,
                player,
                move,
                mandatory_jump=self._mandatory_jump,
            )
            self._board = applied.board
            self._turn = applied.next_turn

            await self._send_to(
                player.opponent,
                OpponentMoveEvent.from_board(applied.board, current_player=applied.next_turn),
            )

            result = game_result(self._board, self._turn)
            if result is not None:
                await self._finish(result)
            return applied

    async def end_game(self, connection: Connection, declared_winner: int) -> Player | None:
        """
        Handle a client's gameEnd declaration.

        The server decides wins itself after every move, so a declaration is only
        honoured as a resignation (the sender naming the opponent as the winner)
        or when the board already agrees with it. Since move() finishes a decided
        game itself, the latter only matters for a board set without move().
        """
        async with self._lock:
            player = self._require_seat(connection)
            declared = Player(declared_winner)
            if self._phase != SessionPhase.IN_PROGRESS:
                logger.debug(
                    "[session] gameEnd from player=%d ignored in phase=%s", player, self._phase
                )
                return None
            if declared == player.opponent:
                logger.info("[session] player=%d resigned", player)
            elif declared == game_result(self._board, self._turn):
                logger.info("[session] player=%d declared winner=%d, board agrees", player, declared)
            else:
                logger.warning(
                    "[session] player=%d declared itself winner; board does not agree, ignored",
                    player,
                )
                return None
            await self._finish(declared)
            return declared

    async def reset(self, connection: Connection) -> None:
        async with self._lock:
            player = self._require_seat(connection)
            self._new_game()
            self._phase = (
                SessionPhase.IN_PROGRESS if self._is_full() else SessionPhase.WAITING_FOR_OPPONENT
            )
            logger.info("[session] player=%d reset the game; phase=%s", player, self._phase)
            await self._broadcast(ResetGameEvent())

    async def leave(self, connection: Connection) -> None:
        async with self._lock:
            player = self.player_of(connection)
            if player is None:
                return
            self._slots[player] = None
            self._winner = None
            remaining = self._slots[player.opponent]
            logger.info("[session] player=%d left", player)
            if remaining is None:
                self._phase = SessionPhase.EMPTY
                return
            self._phase = SessionPhase.WAITING_FOR_OPPONENT
            await remaining.send(PlayerDisconnectedEvent(player=int(player)))
            await remaining.send(WaitingForOpponentEvent())

    # -- PRIVATE HELPERS --
    def _is_full(self) -> bool:
        return all(seat is not None for seat in self._slots.values())

    def _require_seat(self, connection: Connection) -> Player:
        player = self.player_of(connection)
        if player is None:
            raise NotSeatedError("Connection does not occupy a player slot.")
        return player

    def _new_game(self) -> None:
        self._board = initial_board()
        self._turn = Player.ONE
        self._winner = None

    async def _finish(self, winner: Player) -> None:
        self._winner = winner
        self._phase = SessionPhase.FINISHED
        logger.info("[session] Game over; winner=%d", winner)
        await self._broadcast(GameEndEvent(winner=int(winner)))

    async def _send_to(self, player: Player, event: OutboundMessage) -> None:
        connection = self._slots[player]
        if connection is not None:
            await connection.send(event)

    async def _broadcast(self, event: OutboundMessage) -> None:
        # called under the lock; a slow peer delays the room but never reorders events
        for player in Player:
            await self._send_to(player, event)
