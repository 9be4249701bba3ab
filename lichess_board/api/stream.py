"""Decoding of the newline delimited JSON game stream."""

import json
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from lichess_board.api.models import KNOWN_EVENT_TYPES, GameEvent
from lichess_board.core.exceptions import EventDecodeError

logger = logging.getLogger("lichess_board.stream")

MOVE_SEPARATOR = " "

_event_adapter: TypeAdapter[GameEvent] = TypeAdapter(GameEvent)


def decode_event(raw: bytes | str) -> Optional[GameEvent]:
    """
    Decode a single stream record.

    ---
    Returns None for record types this client has no use for. Anything that is not a JSON object,
    or a known record that does not have the expected shape, is fatal.
    """
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise EventDecodeError(f"Malformed stream record: {exc}") from exc

    if not isinstance(payload, dict):
        raise EventDecodeError(f"Expected a JSON object, got {type(payload).__name__}.")

    kind = payload.get("type")
    if kind is not None and not isinstance(kind, str):
        raise EventDecodeError(f"Record type must be a string, got {type(kind).__name__}.")
    if kind not in KNOWN_EVENT_TYPES:
        logger.debug("Skipping stream record of type %r", kind)
        return None

    try:
        return _event_adapter.validate_python(payload)
    except ValidationError as exc:
        raise EventDecodeError(f"Invalid {kind!r} record: {exc}") from exc


def split_moves(moves: str) -> list[str]:
    """Split a move history into tokens. An empty history has no tokens (not one empty token)."""
    if not moves.strip():
        return []
    return [token for token in moves.strip().split(MOVE_SEPARATOR) if token]
