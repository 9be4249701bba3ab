"""
Two views of the same game.

* remote: driven by the server's long-notation move history. This is the source of truth.
* local: driven by what the user types (human notation). It mirrors every remote move,
  and may run ahead by the move the user just played until the server echoes it back.

Both move lists only ever grow.
"""

from dataclasses import dataclass
from typing import Iterator

import chess

from lichess_board.core.exceptions import (
    InvalidMoveError,
    ProtocolError,
    RemoteMoveError,
)
from lichess_board.game.notation import Notation, decode, encode, legal_moves


@dataclass(frozen=True)
class PlayedMove:
    """A single ply with both encodings, computed once against the position it was played from."""

    move: chess.Move
    san: str
    uci: str


class BoardModel:
    def __init__(self) -> None:
        self._remote = chess.Board()
        self._local = chess.Board()
        self._remote_moves: list[PlayedMove] = []
        self._local_moves: list[PlayedMove] = []

    # --- READ ONLY VIEWS ---
    @property
    def remote_moves(self) -> tuple[PlayedMove, ...]:
        return tuple(self._remote_moves)

    @property
    def local_moves(self) -> tuple[PlayedMove, ...]:
        return tuple(self._local_moves)

    @property
    def remote_length(self) -> int:
        return len(self._remote_moves)

    @property
    def local_length(self) -> int:
        return len(self._local_moves)

    @property
    def pending_local_moves(self) -> int:
        """Moves played locally that the server has not echoed yet."""
        return max(0, self.local_length - self.remote_length)

    @property
    def remote_position(self) -> chess.Board:
        return self._remote.copy(stack=False)

    @property
    def local_position(self) -> chess.Board:
        return self._local.copy(stack=False)

    # --- MUTATIONS ---
    def apply_remote_token(self, token: str) -> PlayedMove:
        """
        Play a move from the server's history onto the remote board.

        ---
        The server is authoritative: a token the engine refuses means both sides disagree about the game,
        and there is no way to recover from that.
        """
        try:
            move = decode(self._remote, token, Notation.LONG)
        except InvalidMoveError as exc:
            raise RemoteMoveError(
                f"Server move {token!r} at ply {self.remote_length} rejected: {exc}"
            ) from exc
        return self._push(self._remote, self._remote_moves, move)

    def mirror_remote_move_to_local(self, index: int) -> PlayedMove:
        """Copy the remote move at `index` onto the local board. Local must be exactly at that ply."""
        if index >= self.remote_length:
            raise IndexError(f"No remote move at ply {index}.")
        if index != self.local_length:
            raise ProtocolError(
                f"Cannot mirror ply {index} onto the local board, which is at ply {self.local_length}."
            )

        played = self._remote_moves[index]
        self._local.push(played.move)
        self._local_moves.append(played)
        return played

    def apply_local_token(self, token: str) -> PlayedMove:
        """
        Play a move typed by the user onto the local board.

        ---
        Raises InvalidMoveError and leaves both boards untouched if the engine refuses the token.
        """
        move = decode(self._local, token, Notation.HUMAN)
        return self._push(self._local, self._local_moves, move)

    def legal_move_suggestions(self) -> Iterator[str]:
        """Legal moves from the current local position, in human notation. Regenerated on every call."""
        position = self.local_position
        for move in legal_moves(position):
            yield encode(position, move, Notation.HUMAN)

    # -- Internal helpers --
    def _push(
        self, board: chess.Board, moves: list[PlayedMove], move: chess.Move
    ) -> PlayedMove:
        played = PlayedMove(
            move=move,
            san=encode(board, move, Notation.HUMAN),
            uci=encode(board, move, Notation.LONG),
        )
        board.push(move)
        moves.append(played)
        return played
