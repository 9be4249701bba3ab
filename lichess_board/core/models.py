"""
Boundary layer data model(s).

The SyncEngine never exits the process itself. It hands a SessionResult back up to the entrypoint,
which is the only place that decides on an exit code.
"""

from dataclasses import dataclass
from typing import Optional

from lichess_board.core.exceptions import LichessClientError
from lichess_board.core.shared_types import GameStatus, Outcome

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_CONFIG = 2


@dataclass(frozen=True)
class SessionResult:
    """How a game session ended."""

    outcome: Outcome
    error: Optional[LichessClientError] = None
    status: Optional[GameStatus] = None

    @property
    def exit_code(self) -> int:
        return EXIT_FATAL if self.outcome == Outcome.FATAL else EXIT_OK

    def describe(self) -> str:
        """One line summary for the user."""
        if self.error is not None:
            return f"{self.outcome}: {self.error}"
        if self.status is not None:
            return f"{self.outcome} ({self.status})"
        return str(self.outcome)
