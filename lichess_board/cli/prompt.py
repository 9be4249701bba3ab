"""Console front end: reads moves from the terminal, with tab completion of legal moves."""

import readline
from typing import Callable, Iterable, Optional

from lichess_board.core.shared_types import Command

PROMPT = "> "

CONTROL_COMMANDS = (Command.RESIGN, Command.QUIT, Command.EXIT)

# SAN uses '-', '+', '#' and '=', so only whitespace separates words
COMPLETER_DELIMITERS = " \t\n"


class ConsolePrompt:
    def __init__(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._read = read
        self._write = write
        self._options: list[str] = []
        self._matches: list[str] = []

    def prompt(self, suggestions: Iterable[str]) -> str:
        """
        Block until the user enters a line.

        ---
        Suggestions are only offered for completion, the caller still validates whatever comes back.
        End of input (Ctrl-D) is read as the exit command.
        """
        self._options = [*CONTROL_COMMANDS, *suggestions]
        readline.set_completer_delims(COMPLETER_DELIMITERS)
        readline.set_completer(self.complete)
        readline.parse_and_bind("tab: complete")
        try:
            return self._read(PROMPT)
        except EOFError:
            self._write("")
            return Command.EXIT
        finally:
            readline.set_completer(None)

    def notify(self, message: str) -> None:
        self._write(message)

    def complete(self, text: str, state: int) -> Optional[str]:
        """readline completer: case-insensitive prefix match over the current options."""
        if state == 0:
            self._matches = filter_has_prefix(self._options, text)
        if state < len(self._matches):
            return self._matches[state]
        return None


def filter_has_prefix(options: Iterable[str], prefix: str) -> list[str]:
    lowered = prefix.lower()
    return [option for option in options if option.lower().startswith(lowered)]
