"""
Type definitions used across layers
"""

from enum import StrEnum


class Side(StrEnum):
    WHITE = "white"
    BLACK = "black"


class GameStatus(StrEnum):
    """Game status strings as lichess sends them."""

    CREATED = "created"
    STARTED = "started"
    ABORTED = "aborted"
    MATE = "mate"
    RESIGN = "resign"
    STALEMATE = "stalemate"
    TIMEOUT = "timeout"
    DRAW = "draw"
    OUT_OF_TIME = "outoftime"
    CHEAT = "cheat"
    NO_START = "noStart"
    UNKNOWN_FINISH = "unknownFinish"
    INSUFFICIENT_MATERIAL_CLAIM = "insufficientMaterialClaim"
    VARIANT_END = "variantEnd"


class Command(StrEnum):
    """Control words typed at the move prompt instead of a move."""

    QUIT = "quit"
    EXIT = "exit"
    RESIGN = "resign"


class Outcome(StrEnum):
    QUIT = "quit"
    RESIGNED = "resigned"
    GAME_OVER = "game over"
    STREAM_ENDED = "stream ended"
    FATAL = "fatal"
