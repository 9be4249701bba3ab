"""
Play a lichess game from the terminal.

    lichess-board --token <token with board:play scope> --gameid <game id> --user <lichess user id>

Token, game id and user can also be given as LICHESS_TOKEN, LICHESS_GAME_ID and LICHESS_USER.
"""

import argparse
import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from lichess_board.cli.prompt import ConsolePrompt
from lichess_board.core.config import DEFAULT_BASE_URL, Settings
from lichess_board.core.exceptions import ConfigError
from lichess_board.core.models import EXIT_CONFIG, SessionResult
from lichess_board.core.shared_types import Outcome
from lichess_board.services.sync_engine import SyncEngine
from lichess_board.transport.http_transport import LichessTransport

logger = logging.getLogger("lichess_board.cli")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lichess-board", description="Play a lichess game from the terminal."
    )
    parser.add_argument("--token", dest="auth_token", help="lichess auth token (with board:play scope)")
    parser.add_argument("--gameid", dest="game_id", help="lichess game id")
    parser.add_argument("--user", dest="user_id", help="lichess user id")
    parser.add_argument("--base-url", dest="base_url", default=DEFAULT_BASE_URL, help="lichess server")
    parser.add_argument("--timeout", type=float, default=None, help="timeout in seconds for move/resign requests")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def load_settings(args: argparse.Namespace, environ: Mapping[str, str]) -> Settings:
    options = {
        "auth_token": args.auth_token,
        "game_id": args.game_id,
        "user_id": args.user_id,
        "base_url": args.base_url,
        "timeout": None if args.timeout is None else str(args.timeout),
    }
    return Settings.from_sources(options, environ)


def play(settings: Settings) -> SessionResult:
    transport = LichessTransport(
        settings.auth_token, base_url=settings.base_url, timeout=settings.timeout
    )
    engine = SyncEngine(
        game_id=settings.game_id,
        user_id=settings.user_id,
        transport=transport,
        interaction=ConsolePrompt(),
    )
    try:
        return engine.play()
    finally:
        transport.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(args, os.environ)
    except ConfigError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG

    try:
        result = play(settings)
    except KeyboardInterrupt:
        # Ctrl-C at the prompt leaves the game like "exit" does
        print()
        result = SessionResult(Outcome.QUIT)
    print(result.describe())
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
