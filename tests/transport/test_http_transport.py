"""Unit tests for lichess_board/transport/http_transport.py (HTTP layer replaced by mocks)"""

import json
from typing import Iterable
from unittest.mock import Mock

import pytest
import requests

from lichess_board.api.models import ChatLineEvent, GameFullEvent, GameStateEvent
from lichess_board.core.exceptions import (
    EventDecodeError,
    MoveSubmissionError,
    ResignationError,
    StreamError,
    StreamOpenError,
)
from lichess_board.transport.http_transport import LichessTransport

TOKEN = "lip_secret"
GAME_ID = "q7ZvsdUF"


def make_response(
    status_code: int = 200, lines: Iterable[bytes] = (), text: str = ""
) -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    response.iter_lines.return_value = iter(list(lines))
    return response


@pytest.fixture
def session() -> Mock:
    mock_session = Mock(spec=requests.Session)
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def transport(session: Mock) -> LichessTransport:
    return LichessTransport(TOKEN, base_url="https://lichess.test/", timeout=5.0, session=session)


def test_every_call_is_authenticated(transport: LichessTransport, session: Mock) -> None:
    assert session.headers["Authorization"] == f"Bearer {TOKEN}"
    assert transport.base_url == "https://lichess.test"


# -- STREAM --
def test_stream_yields_decoded_events(
    transport: LichessTransport, session: Mock, full_state_record, delta_state_record
) -> None:
    lines = [
        json.dumps(full_state_record(moves="e2e4")).encode(),
        b"",  # keep-alive
        json.dumps({"type": "somethingNew"}).encode(),
        json.dumps({"type": "chatLine", "username": "bob", "text": "hi", "room": "player"}).encode(),
        json.dumps(delta_state_record("e2e4 e7e5")).encode(),
    ]
    response = make_response(lines=lines)
    session.get.return_value = response

    with transport.open_stream(GAME_ID) as events:
        received = list(events)

    assert [type(event) for event in received] == [GameFullEvent, ChatLineEvent, GameStateEvent]
    session.get.assert_called_once_with(
        f"https://lichess.test/api/board/game/stream/{GAME_ID}",
        stream=True,
        timeout=(5.0, None),
    )
    response.close.assert_called_once()


def test_stream_is_closed_when_consumer_stops_early(
    transport: LichessTransport, session: Mock, delta_state_record
) -> None:
    lines = [json.dumps(delta_state_record("e2e4")).encode()] * 3
    response = make_response(lines=lines)
    session.get.return_value = response

    with transport.open_stream(GAME_ID) as events:
        first = next(events)

    assert isinstance(first, GameStateEvent)
    response.close.assert_called_once()


@pytest.mark.parametrize("status_code", [401, 404, 500])
def test_stream_open_failure(transport: LichessTransport, session: Mock, status_code: int) -> None:
    response = make_response(status_code=status_code)
    session.get.return_value = response

    with pytest.raises(StreamOpenError):
        with transport.open_stream(GAME_ID):
            pass
    response.close.assert_called_once()


def test_stream_connection_failure(transport: LichessTransport, session: Mock) -> None:
    session.get.side_effect = requests.ConnectionError("no route to host")

    with pytest.raises(StreamOpenError):
        with transport.open_stream(GAME_ID):
            pass


def test_stream_interrupted(transport: LichessTransport, session: Mock) -> None:
    response = make_response()
    response.iter_lines.side_effect = requests.exceptions.ChunkedEncodingError("connection reset")
    session.get.return_value = response

    with pytest.raises(StreamError):
        with transport.open_stream(GAME_ID) as events:
            list(events)
    response.close.assert_called_once()


def test_malformed_stream_record(transport: LichessTransport, session: Mock) -> None:
    response = make_response(lines=[b"{truncated"])
    session.get.return_value = response

    with pytest.raises(EventDecodeError):
        with transport.open_stream(GAME_ID) as events:
            list(events)
    response.close.assert_called_once()


# -- MOVES --
def test_submit_move(transport: LichessTransport, session: Mock) -> None:
    session.post.return_value = make_response()
    transport.submit_move(GAME_ID, "e2e4")

    session.post.assert_called_once_with(
        f"https://lichess.test/api/board/game/{GAME_ID}/move/e2e4", timeout=5.0
    )


def test_submit_move_rejected(transport: LichessTransport, session: Mock) -> None:
    session.post.return_value = make_response(status_code=400, text='{"error": "Not your turn"}')

    with pytest.raises(MoveSubmissionError):
        transport.submit_move(GAME_ID, "e2e4")


def test_submit_move_connection_failure(transport: LichessTransport, session: Mock) -> None:
    session.post.side_effect = requests.Timeout("timed out")

    with pytest.raises(MoveSubmissionError):
        transport.submit_move(GAME_ID, "e2e4")


# -- RESIGN --
def test_resign(transport: LichessTransport, session: Mock) -> None:
    session.post.return_value = make_response()
    transport.resign(GAME_ID)

    session.post.assert_called_once_with(
        f"https://lichess.test/api/board/game/{GAME_ID}/resign", timeout=5.0
    )


@pytest.mark.parametrize(
    "outcome",
    [make_response(status_code=400), requests.ConnectionError("down")],
)
def test_resign_failure(transport: LichessTransport, session: Mock, outcome: object) -> None:
    if isinstance(outcome, Exception):
        session.post.side_effect = outcome
    else:
        session.post.return_value = outcome

    with pytest.raises(ResignationError):
        transport.resign(GAME_ID)


def test_close(transport: LichessTransport, session: Mock) -> None:
    transport.close()
    session.close.assert_called_once()
