"""
Keeps the local board in step with the server and decides when the local user gets to move.

The server never says "it is your turn". Whose move it is gets derived again on every event from the
length of the server's move history (White moves on even ply counts) and the side the user plays.
Events may redeliver history that was already applied, so every event is diffed against what is known.
"""

import logging
from enum import Enum, auto
from typing import Iterable, Optional, Protocol, assert_never

from lichess_board.api.models import (
    STANDARD_VARIANT,
    STARTING_POSITION,
    ChatLineEvent,
    GameEvent,
    GameFullEvent,
    GameStateEvent,
    OpponentGoneEvent,
)
from lichess_board.api.stream import split_moves
from lichess_board.core.exceptions import (
    FatalSessionError,
    GameNotActiveError,
    InvalidMoveError,
    NoMatchingSideError,
    ProtocolError,
    ResignationError,
)
from lichess_board.core.models import SessionResult
from lichess_board.core.shared_types import Command, GameStatus, Outcome, Side
from lichess_board.game.board_model import BoardModel
from lichess_board.transport.transport import GameTransport

logger = logging.getLogger("lichess_board.sync")


class InteractionLoop(Protocol):
    """Just the parts of the front end the engine needs"""

    def prompt(self, suggestions: Iterable[str]) -> str: ...
    def notify(self, message: str) -> None: ...


class SyncState(Enum):
    AWAITING_FULL_STATE = auto()
    SYNCED = auto()
    AWAITING_LOCAL_MOVE = auto()
    TERMINAL = auto()


def side_to_move(ply_count: int) -> Side:
    return Side.WHITE if ply_count % 2 == 0 else Side.BLACK


def is_local_turn(side: Side, ply_count: int) -> bool:
    return side_to_move(ply_count) == side


class SyncEngine:
    """Single threaded: the stream is only read while no prompt is outstanding."""

    def __init__(
        self,
        game_id: str,
        user_id: str,
        transport: GameTransport,
        interaction: InteractionLoop,
        board: Optional[BoardModel] = None,
    ) -> None:
        self.game_id = game_id
        self.user_id = user_id.lower()
        self.transport = transport
        self.interaction = interaction
        self.board = board or BoardModel()
        self.state = SyncState.AWAITING_FULL_STATE
        self.side: Optional[Side] = None

    # --- ENTRYPOINTS ---
    def play(self) -> SessionResult:
        """Open the game stream and run until the session ends. The stream is closed on every exit path."""
        try:
            with self.transport.open_stream(self.game_id) as events:
                return self.run(events)
        except FatalSessionError as exc:
            return self._fail(exc)

    def run(self, events: Iterable[GameEvent]) -> SessionResult:
        """Consume events until one of them ends the session, or the stream runs out."""
        try:
            for event in events:
                result = self.handle_event(event)
                if result is not None:
                    return self._finish(result)
        except FatalSessionError as exc:
            return self._fail(exc)
        logger.info("Game stream ended")
        return self._finish(SessionResult(Outcome.STREAM_ENDED))

    def handle_event(self, event: GameEvent) -> Optional[SessionResult]:
        """Apply a single event. Returns a result once the session is over, None to keep going."""
        if self.state is SyncState.TERMINAL:
            raise ProtocolError("Session already ended.")

        match event:
            case GameFullEvent():
                return self._on_full_state(event)
            case GameStateEvent():
                return self._on_delta_state(event)
            case ChatLineEvent():
                self.interaction.notify(f"[{event.room}] {event.username}: {event.text}")
                return None
            case OpponentGoneEvent():
                self._on_opponent_gone(event)
                return None
            case _:
                assert_never(event)

    # --- EVENT HANDLERS ---
    def _on_full_state(self, event: GameFullEvent) -> Optional[SessionResult]:
        if event.state.status != GameStatus.STARTED:
            raise GameNotActiveError(f"Game is not active (status: {event.state.status}).")
        self._assert_supported(event)

        self._reconcile(split_moves(event.state.moves))

        side = self._match_side(event)
        if self.side is None:
            self.side = side
            logger.info("Playing %s in game %s", side, event.id)
        elif side != self.side:
            raise ProtocolError(f"Side changed from {self.side} to {side} mid game.")

        self.state = SyncState.SYNCED
        return self._evaluate_turn()

    def _on_delta_state(self, event: GameStateEvent) -> Optional[SessionResult]:
        if self.side is None:
            raise ProtocolError("Game state received before the full game state.")

        self._reconcile(split_moves(event.moves))

        if event.status != GameStatus.STARTED:
            logger.info("Game over: %s", event.status)
            return SessionResult(Outcome.GAME_OVER, status=event.status)
        return self._evaluate_turn()

    def _on_opponent_gone(self, event: OpponentGoneEvent) -> None:
        if not event.gone:
            logger.info("Opponent is back")
        elif event.claim_win_in_seconds is not None:
            logger.warning(
                "Opponent left the game, victory can be claimed in %ss",
                event.claim_win_in_seconds,
            )
        else:
            logger.warning("Opponent left the game")

    # --- RECONCILIATION ---
    def _reconcile(self, tokens: list[str]) -> None:
        """
        Extend both boards with the server moves not seen yet.

        ---
        Remote takes every token from its own length onwards. Local only takes those from ITS length onwards:
        a move the user already played locally is echoed back by the server and must not be applied twice.
        """
        remote_length = self.board.remote_length
        if len(tokens) < remote_length:
            raise ProtocolError(
                f"Server history shrank from {remote_length} to {len(tokens)} plies."
            )

        for index in range(remote_length, len(tokens)):
            remote = self.board.apply_remote_token(tokens[index])
            if index >= self.board.local_length:
                self.board.mirror_remote_move_to_local(index)
            elif self.board.local_moves[index].move != remote.move:
                raise ProtocolError(
                    f"Server recorded {remote.uci} at ply {index}, local board has {self.board.local_moves[index].uci}."
                )

    def _evaluate_turn(self) -> Optional[SessionResult]:
        # Only the server's history length counts, never the local one
        ply_count = self.board.remote_length
        if self.board.pending_local_moves:
            logger.debug("Waiting for the server to confirm the last move")
            return None

        if self.side is None or not is_local_turn(self.side, ply_count):
            logger.debug("%s to move at ply %d", side_to_move(ply_count), ply_count)
            return None

        self.state = SyncState.AWAITING_LOCAL_MOVE
        return self._await_local_move()

    # --- LOCAL TURN ---
    def _await_local_move(self) -> Optional[SessionResult]:
        """Prompt until the user plays a legal move, quits or resigns."""
        while True:
            text = self.interaction.prompt(self.board.legal_move_suggestions()).strip()
            if not text:
                continue

            match text.lower():
                case Command.QUIT | Command.EXIT:
                    return SessionResult(Outcome.QUIT)
                case Command.RESIGN:
                    self._resign()
                    return SessionResult(Outcome.RESIGNED)

            try:
                played = self.board.apply_local_token(text)
            except InvalidMoveError as exc:
                self.interaction.notify(f"Invalid move {exc}")
                continue

            # Local is now one ply ahead of the server. A failure here cannot be undone.
            self.transport.submit_move(self.game_id, played.uci)
            self.state = SyncState.SYNCED
            return None

    def _resign(self) -> None:
        try:
            self.transport.resign(self.game_id)
        except ResignationError as exc:
            logger.warning("Resignation failed: %s", exc)

    # -- Internal helpers --
    def _match_side(self, event: GameFullEvent) -> Side:
        if event.white.id is not None and event.white.id.lower() == self.user_id:
            return Side.WHITE
        if event.black.id is not None and event.black.id.lower() == self.user_id:
            return Side.BLACK
        raise NoMatchingSideError(
            f"User {self.user_id!r} does not match any side of game {event.id}."
        )

    def _assert_supported(self, event: GameFullEvent) -> None:
        """Turn order is derived from move parity, so only standard games from the initial position work."""
        if event.variant.key != STANDARD_VARIANT:
            raise ProtocolError(f"Unsupported variant {event.variant.key!r}.")
        if event.initial_fen != STARTING_POSITION:
            raise ProtocolError(f"Games from a custom position are not supported ({event.initial_fen}).")

    def _finish(self, result: SessionResult) -> SessionResult:
        self.state = SyncState.TERMINAL
        return result

    def _fail(self, error: FatalSessionError) -> SessionResult:
        logger.error("%s", error)
        return self._finish(SessionResult(Outcome.FATAL, error=error))
