import unittest

from daily_sudoku.io.codec import decode_digits, encode_digits, normalize_digits

from fixtures import SOLVED_DIGITS, solved_grid


class CodecTests(unittest.TestCase):
    def test_decode_reads_row_major(self) -> None:
        self.assertEqual(decode_digits(SOLVED_DIGITS), solved_grid())

    def test_short_string_is_zero_padded(self) -> None:
        grid = decode_digits("1" * 40)
        flat = [value for row in grid for value in row]
        self.assertEqual(len(grid), 9)
        self.assertTrue(all(len(row) == 9 for row in grid))
        self.assertEqual(flat[:40], [1] * 40)
        self.assertEqual(flat[40:], [0] * 41)

    def test_long_string_is_truncated(self) -> None:
        grid = decode_digits(SOLVED_DIGITS + "999")
        self.assertEqual(grid, solved_grid())

    def test_non_digits_are_stripped(self) -> None:
        self.assertEqual(normalize_digits("1-2 3\n4")[:5], "12340")

    def test_missing_input_decodes_to_empty_grid(self) -> None:
        for value in (None, "", "abc"):
            grid = decode_digits(value)
            self.assertEqual(grid, [[0] * 9 for _ in range(9)])

    def test_encode_matches_stored_format(self) -> None:
        self.assertEqual(encode_digits(solved_grid()), SOLVED_DIGITS)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
