"""CLI entrypoint for the crossword construction assistant."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from crossfill.core.exceptions import CrosswordError
from crossfill.engine.session import CrosswordSession, SessionConfig
from crossfill.io.shell import CrosswordShell
from crossfill.utils.logger import configure_logging
from crossfill.utils.pretty import format_solution, pretty_print_board


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill crossword slots that the crossing letters make unambiguous",
    )
    parser.add_argument("board", type=Path, help="Board file with one slot per line")
    parser.add_argument(
        "-d",
        "--dictionary",
        type=Path,
        default=Path("dict.json"),
        help="Dictionary JSON file (default: dict.json)",
    )
    parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Never download word lists for keys missing from the dictionary",
    )
    parser.add_argument(
        "--solve-only",
        action="store_true",
        help="Solve once, print the board and exit instead of starting the shell",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    config = SessionConfig(
        board_path=args.board,
        dictionary_path=args.dictionary,
        fetch_missing=not args.no_fetch,
    )
    try:
        session = CrosswordSession.open(config)
    except CrosswordError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.solve_only:
        state = session.solve()
        pretty_print_board(session.board, label=f"State: {state.value}")
        print(f"Solution: {format_solution(session.board)}")
        return 0

    CrosswordShell(session).cmdloop()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
