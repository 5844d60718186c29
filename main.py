"""CLI entrypoint for the daily Sudoku game."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from daily_sudoku.core.constants import BOARD, SessionState
from daily_sudoku.core.exceptions import SudokuError
from daily_sudoku.data.backend import LocalBackend, SupabaseBackend, SudokuBackend
from daily_sudoku.data.identity import NicknameStore, default_resolvers, resolve_identity
from daily_sudoku.engine.session import SessionController
from daily_sudoku.io.supabase_client import SupabaseClient
from daily_sudoku.utils.logger import configure_logging, level_from_name
from daily_sudoku.utils.pretty import format_time, pretty_print_grid, print_ranking

HELP_TEXT = (
    "Commands: s ROW COL (select), v DIGIT (set value), d (clear), "
    "p (print grid), t (time), h (help), q (quit)"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play the daily Sudoku challenge")
    parser.add_argument(
        "--backend",
        type=str,
        choices=["local", "supabase"],
        default="local",
        help="Where puzzles and scores are stored (supabase reads SUPABASE_URL / SUPABASE_ANON_KEY)",
    )
    parser.add_argument(
        "--store-dir",
        type=Path,
        default=Path("local_db/collections"),
        help="Directory for the local backend's JSON documents",
    )
    parser.add_argument(
        "--nickname-file",
        type=Path,
        default=Path("local_db/nickname.json"),
        help="Where the resolved nickname is persisted",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("play", help="Play today's puzzle")
    commands.add_parser("leaderboard", help="Show today's leaderboard")
    importer = commands.add_parser("import-puzzle", help="Add a puzzle to the local store")
    importer.add_argument("--date", required=True, help="Play date (YYYY-MM-DD)")
    importer.add_argument("--puzzle", required=True, help="Up to 81 digits, 0 = blank")
    importer.add_argument("--solution", default=None, help="Optional solution digits")
    return parser


def build_backend(args: argparse.Namespace) -> SudokuBackend:
    if args.backend == "supabase":
        return SupabaseBackend(SupabaseClient.from_env())
    return LocalBackend(args.store_dir)


def run_play(
    controller: SessionController,
    commands: Iterable[str],
    stream: TextIO,
) -> None:
    """Feed text commands to a started session until it completes or quits."""

    pretty_print_grid(controller.grid, stream=stream)
    print(HELP_TEXT, file=stream)
    for raw in commands:
        controller.timer.sync()
        parts = raw.split()
        if not parts:
            continue
        action, values = parts[0].lower(), parts[1:]
        try:
            numbers = [int(value) for value in values]
        except ValueError:
            print(f"Not a number: {' '.join(values)}", file=stream)
            continue

        if action == "q":
            break
        if action == "h":
            print(HELP_TEXT, file=stream)
        elif action == "t":
            print(format_time(controller.elapsed_seconds), file=stream)
        elif action == "p":
            pretty_print_grid(controller.grid, stream=stream)
        elif action == "s" and len(numbers) == 2 and BOARD.contains(*numbers):
            controller.select_cell(numbers[0], numbers[1])
            if controller.grid.selection != (numbers[0], numbers[1]):
                print("That cell is a clue", file=stream)
        elif action == "v" and len(numbers) == 1 and 0 <= numbers[0] <= 9:
            controller.set_value(numbers[0])
            pretty_print_grid(controller.grid, stream=stream)
        elif action == "d":
            controller.clear_value()
            pretty_print_grid(controller.grid, stream=stream)
        else:
            print(f"Unknown command: {raw.strip()}", file=stream)
            continue

        if controller.is_completed:
            print(f"Solved in {format_time(controller.elapsed_seconds)}!", file=stream)
            break


def report(controller: SessionController, stream: TextIO) -> None:
    if controller.error:
        print(f"Error: {controller.error}", file=stream)
    if controller.warning:
        print(f"Warning: {controller.warning}", file=stream)
    if controller.ranking is not None:
        print_ranking(controller.ranking, stream=stream)


def main(argv: Optional[List[str]] = None, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level_from_name(args.log_level))

    if args.command == "import-puzzle":
        puzzle = LocalBackend(args.store_dir).add_puzzle(args.date, args.puzzle, args.solution)
        print(f"Stored puzzle {puzzle.id} for {puzzle.play_date}", file=stdout)
        return 0

    store = NicknameStore(args.nickname_file)
    try:
        player = resolve_identity(default_resolvers(store), store)
        controller = SessionController(build_backend(args), player)
        state = controller.load()
    except SudokuError as exc:
        print(f"Error loading puzzle: {exc}", file=stdout)
        return 1

    print(f"Playing as {player}", file=stdout)
    if args.command == "play" and state == SessionState.NOT_STARTED:
        controller.start()
        run_play(controller, stdin, stdout)
    elif args.command == "play":
        print("You already played today's puzzle.", file=stdout)
    elif state == SessionState.NOT_STARTED:
        print("Finish today's puzzle to see the leaderboard.", file=stdout)
        return 0

    report(controller, stdout)
    return 1 if controller.error else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
