"""
Thin boundary around the rules engine (python-chess).

Two notations are used for the same moves:
* HUMAN: standard algebraic notation (SAN), e.g. "Nf3", "exd5", "O-O". Used for prompting and user input.
* LONG: UCI long algebraic notation, e.g. "g1f3", "e7e8q". Origin + destination, unambiguous. Used on the wire.

Legality (castling, en passant, promotion, checks...) is entirely the engine's business.
"""

from enum import Enum, auto
from typing import Iterator

import chess

from lichess_board.core.exceptions import InvalidMoveError


class Notation(Enum):
    HUMAN = auto()
    LONG = auto()


def decode(position: chess.Board, token: str, notation: Notation) -> chess.Move:
    """Parse a token into a legal move from the given position."""
    token = token.strip()
    if not token:
        raise InvalidMoveError("Empty move.")

    try:
        if notation is Notation.HUMAN:
            move = position.parse_san(token)
        else:
            move = position.parse_uci(token)
    except ValueError as exc:
        # InvalidMoveError / IllegalMoveError / AmbiguousMoveError from python-chess are all ValueErrors
        raise InvalidMoveError(f"{token!r}: {exc}") from exc

    # "0000" and friends parse to the null move, which is never something a player can play here
    if not move:
        raise InvalidMoveError(f"{token!r} is a null move.")
    return move


def encode(position: chess.Board, move: chess.Move, notation: Notation) -> str:
    """Encode a move played from the given position (position is the one BEFORE the move)."""
    if notation is Notation.HUMAN:
        return position.san(move)
    return position.uci(move)


def legal_moves(position: chess.Board) -> Iterator[chess.Move]:
    """Every legal move from the position, in engine order."""
    yield from position.legal_moves
