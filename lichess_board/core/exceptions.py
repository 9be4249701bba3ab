"""
Custom exceptions used across layers.

Two tiers:
* FatalSessionError (and subclasses): the session cannot continue. The SyncEngine turns these into a FATAL SessionResult.
* Everything else is handled where it is raised (invalid local input, failed resignation, bad configuration at startup).
"""


class LichessClientError(Exception):
    """Top-level exception for anything raised by this package."""


class ConfigError(LichessClientError):
    """Missing or invalid startup configuration."""


class InvalidMoveError(LichessClientError):
    """A move token the rules engine refused. Recoverable: the user is asked again."""


class ResignationError(LichessClientError):
    """The resign request failed. Not fatal, the process is exiting anyway."""


# --- FATAL ---
class FatalSessionError(LichessClientError):
    """Local and remote state can no longer be trusted to agree."""


class StreamError(FatalSessionError):
    """Reading from the game stream failed."""


class StreamOpenError(StreamError):
    """The game stream could not be opened."""


class EventDecodeError(FatalSessionError):
    """A record on the game stream could not be decoded."""


class RemoteMoveError(FatalSessionError):
    """The server sent a move the rules engine does not accept."""


class NoMatchingSideError(FatalSessionError):
    """The configured user plays neither side of the game."""


class GameNotActiveError(FatalSessionError):
    """The game is not in the 'started' status."""


class ProtocolError(FatalSessionError):
    """The stream delivered something that contradicts what was already seen."""


class MoveSubmissionError(FatalSessionError):
    """A locally accepted move could not be sent to the server."""
