import io
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from main import main

from fixtures import SOLVED_DIGITS


def holes(digits: str, *indexes: int) -> str:
    chars = list(digits)
    for index in indexes:
        chars[index] = "0"
    return "".join(chars)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.base_args = [
            "--store-dir", str(root / "collections"),
            "--nickname-file", str(root / "nickname.json"),
            "--log-level", "ERROR",
        ]
        self.today = datetime.now(timezone.utc).date().isoformat()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *args: str, stdin: str = "") -> tuple[int, str]:
        out = io.StringIO()
        code = main(self.base_args + list(args), stdin=io.StringIO(stdin), stdout=out)
        return code, out.getvalue()

    def _import_today(self) -> None:
        code, output = self._run(
            "import-puzzle",
            "--date", self.today,
            "--puzzle", holes(SOLVED_DIGITS, 0, 80),
            "--solution", SOLVED_DIGITS,
        )
        self.assertEqual(code, 0)
        self.assertIn("Stored puzzle 1", output)

    def test_missing_puzzle_is_reported(self) -> None:
        code, output = self._run("play")
        self.assertEqual(code, 1)
        self.assertIn("Error loading puzzle", output)

    def test_play_to_completion_then_leaderboard(self) -> None:
        self._import_today()
        code, output = self._run("play", stdin="s 0 1\ns 0 0\nv 5\ns 8 8\nv 9\n")
        self.assertEqual(code, 0)
        self.assertIn("That cell is a clue", output)
        self.assertIn("Solved in", output)
        self.assertIn("--- Leaderboard ---", output)

        code, output = self._run("play")
        self.assertIn("already played", output)
        self.assertIn("--- You ---", output)

        code, output = self._run("leaderboard")
        self.assertEqual(code, 0)
        self.assertIn("  1. Player_", output)

    def test_leaderboard_before_playing(self) -> None:
        self._import_today()
        code, output = self._run("leaderboard")
        self.assertEqual(code, 0)
        self.assertIn("Finish today's puzzle", output)

    def test_quit_leaves_session_unfinished(self) -> None:
        self._import_today()
        code, output = self._run("play", stdin="x\nv nine\nq\n")
        self.assertEqual(code, 0)
        self.assertIn("Unknown command: x", output)
        self.assertIn("Not a number", output)
        self.assertNotIn("Solved in", output)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
