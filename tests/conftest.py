"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures used for testing multiple layers: builders for the records the game stream sends.
"""

from typing import Any, Callable

import pytest

from lichess_board.api.models import GameFullEvent, GameStateEvent

GAME_ID = "q7ZvsdUF"
WHITE_ID = "alice"
BLACK_ID = "bob"


def full_state_payload(
    moves: str = "",
    status: str = "started",
    white_id: str = WHITE_ID,
    black_id: str = BLACK_ID,
) -> dict[str, Any]:
    """A gameFull record as lichess sends it (trimmed to the interesting fields)."""
    return {
        "type": "gameFull",
        "id": GAME_ID,
        "rated": False,
        "variant": {"key": "standard", "name": "Standard", "short": "Std"},
        "clock": {"initial": 1200000, "increment": 10000},
        "speed": "classical",
        "white": {"id": white_id, "name": white_id.capitalize(), "rating": 1789},
        "black": {"id": black_id, "name": black_id.capitalize(), "rating": 1801},
        "initialFen": "startpos",
        "state": {
            "type": "gameState",
            "moves": moves,
            "wtime": 1200000,
            "btime": 1200000,
            "winc": 10000,
            "binc": 10000,
            "status": status,
        },
    }


def delta_state_payload(moves: str, status: str = "started") -> dict[str, Any]:
    return {
        "type": "gameState",
        "moves": moves,
        "wtime": 1190000,
        "btime": 1195000,
        "winc": 10000,
        "binc": 10000,
        "status": status,
    }


@pytest.fixture
def full_state() -> Callable[..., GameFullEvent]:
    """Build GameFullEvent's with sensible defaults."""

    def _build(**kwargs: Any) -> GameFullEvent:
        return GameFullEvent.model_validate(full_state_payload(**kwargs))

    return _build


@pytest.fixture
def delta_state() -> Callable[..., GameStateEvent]:
    """Build GameStateEvent's with sensible defaults."""

    def _build(moves: str, status: str = "started") -> GameStateEvent:
        return GameStateEvent.model_validate(delta_state_payload(moves, status))

    return _build


@pytest.fixture
def full_state_record() -> Callable[..., dict[str, Any]]:
    """Raw gameFull payloads, for tests of the decoding layer."""
    return full_state_payload


@pytest.fixture
def delta_state_record() -> Callable[..., dict[str, Any]]:
    """Raw gameState payloads, for tests of the decoding layer."""
    return delta_state_payload
