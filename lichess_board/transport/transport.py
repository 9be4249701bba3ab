"""Protocol transport (lichess over HTTP for now, anything that can stream events and take moves later)"""

from contextlib import AbstractContextManager
from typing import Iterator, Protocol

from lichess_board.api.models import GameEvent


class GameTransport(Protocol):
    """Remote side of the game"""

    def open_stream(
        self, game_id: str
    ) -> AbstractContextManager[Iterator[GameEvent]]:
        """Open the game stream. The stream is released when the context exits, whatever the reason."""
        ...

    def submit_move(self, game_id: str, move_uci: str) -> None:
        """Send a move in long notation. Raises MoveSubmissionError if the server does not accept it."""
        ...

    def resign(self, game_id: str) -> None:
        """Resign the game. Raises ResignationError on failure."""
        ...
