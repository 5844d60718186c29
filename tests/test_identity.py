import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from daily_sudoku.core.exceptions import IdentityResolutionError
from daily_sudoku.data.identity import (
    ExternalIdentityResolver,
    NicknameStore,
    StoredNicknameResolver,
    TimestampNicknameResolver,
    default_resolvers,
    resolve_identity,
)


class IdentityTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = NicknameStore(Path(self._tmp.name) / "nested" / "nickname.json")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_timestamp_nickname_format(self) -> None:
        resolver = TimestampNicknameResolver(clock=lambda: datetime(2025, 12, 19, 14, 30, 25))
        self.assertEqual(resolver.resolve(), "Player_20251219143025")

    def test_external_alias_wins_and_is_persisted(self) -> None:
        nickname = resolve_identity(default_resolvers(self.store, provider=lambda: "neo"), self.store)
        self.assertEqual(nickname, "neo")
        self.assertEqual(self.store.load(), "neo")

    def test_failing_provider_falls_back_to_stored_nickname(self) -> None:
        self.store.save("trinity")

        def broken():
            raise ConnectionError("wallet unavailable")

        nickname = resolve_identity(default_resolvers(self.store, provider=broken), self.store)
        self.assertEqual(nickname, "trinity")

    def test_empty_alias_is_a_failure(self) -> None:
        with self.assertRaises(IdentityResolutionError):
            ExternalIdentityResolver(lambda: "").resolve()

    def test_generated_nickname_when_nothing_stored(self) -> None:
        with self.assertLogs("daily_sudoku.data.identity", level="WARNING") as logs:
            nickname = resolve_identity(default_resolvers(self.store), self.store)
        self.assertTrue(nickname.startswith("Player_"))
        self.assertEqual(self.store.load(), nickname)
        self.assertTrue(any("StoredNicknameResolver" in line for line in logs.output))

    def test_stored_resolver_without_file_fails(self) -> None:
        with self.assertRaises(IdentityResolutionError):
            StoredNicknameResolver(self.store).resolve()

    def test_corrupt_store_reads_as_empty(self) -> None:
        self.store.path.parent.mkdir(parents=True)
        self.store.path.write_text("not json", encoding="utf-8")
        self.assertIsNone(self.store.load())

    def test_all_resolvers_failing_raises(self) -> None:
        with self.assertRaises(IdentityResolutionError):
            resolve_identity([StoredNicknameResolver(self.store)], self.store)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
