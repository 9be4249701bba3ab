"""Implementation of (Game)Transport using requests against the lichess Board API"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import requests

from lichess_board.api.models import GameEvent
from lichess_board.api.stream import decode_event
from lichess_board.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from lichess_board.core.exceptions import (
    MoveSubmissionError,
    ResignationError,
    StreamError,
    StreamOpenError,
)

logger = logging.getLogger("lichess_board.transport")


class LichessTransport:
    """Every call carries the bearer token. Only the stream read is allowed to block forever."""

    def __init__(
        self,
        auth_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {auth_token}"})

    @contextmanager
    def open_stream(self, game_id: str) -> Iterator[Iterator[GameEvent]]:
        url = self._url(f"/api/board/game/stream/{game_id}")
        logger.info("Opening game stream for %s", game_id)
        try:
            response = self._session.get(url, stream=True, timeout=(self.timeout, None))
        except requests.RequestException as exc:
            raise StreamOpenError(f"Couldn't start streaming: {exc}") from exc

        try:
            if response.status_code != 200:
                raise StreamOpenError(
                    f"Couldn't start streaming (HTTP {response.status_code})"
                )
            yield self._iter_events(response)
        finally:
            response.close()
            logger.debug("Game stream for %s closed", game_id)

    def submit_move(self, game_id: str, move_uci: str) -> None:
        url = self._url(f"/api/board/game/{game_id}/move/{move_uci}")
        try:
            response = self._session.post(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise MoveSubmissionError(f"Couldn't send the move {move_uci}: {exc}") from exc

        if response.status_code != 200:
            raise MoveSubmissionError(
                f"Couldn't send the move {move_uci} (HTTP {response.status_code}: {response.text})"
            )
        logger.info("Sent move %s", move_uci)

    def resign(self, game_id: str) -> None:
        url = self._url(f"/api/board/game/{game_id}/resign")
        try:
            response = self._session.post(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ResignationError(f"Couldn't send resignation: {exc}") from exc

        if response.status_code != 200:
            raise ResignationError(
                f"Couldn't send resignation (HTTP {response.status_code})"
            )
        logger.info("Resigned game %s", game_id)

    def close(self) -> None:
        self._session.close()

    # -- Internal helpers --
    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _iter_events(self, response: requests.Response) -> Iterator[GameEvent]:
        """Yield decoded events. Blank lines are keep-alives."""
        try:
            for line in response.iter_lines():
                if not line or not line.strip():
                    continue
                event = decode_event(line)
                if event is not None:
                    yield event
        except requests.RequestException as exc:
            raise StreamError(f"Game stream interrupted: {exc}") from exc
