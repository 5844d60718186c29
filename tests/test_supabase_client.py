import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from daily_sudoku.core.exceptions import BackendError, ConfigurationError, PuzzleLoadError
from daily_sudoku.data.backend import SupabaseBackend
from daily_sudoku.engine.session import SessionController
from daily_sudoku.io.supabase_client import SupabaseClient


def fake_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class SupabaseClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.client = SupabaseClient("https://demo.supabase.co/", "anon", session=self.session)

    def test_select_builds_postgrest_query(self) -> None:
        self.session.request.return_value = fake_response([{"id": 1}])
        rows = self.client.select(
            "sudoku_scores",
            columns="id",
            filters={"sudoku_id": 4},
            order="time_seconds",
            limit=2,
        )
        self.assertEqual(rows, [{"id": 1}])
        method, url = self.session.request.call_args.args
        kwargs = self.session.request.call_args.kwargs
        self.assertEqual(method, "GET")
        self.assertEqual(url, "https://demo.supabase.co/rest/v1/sudoku_scores")
        self.assertEqual(
            kwargs["params"],
            {"select": "id", "sudoku_id": "eq.4", "order": "time_seconds.asc", "limit": 2},
        )
        self.assertEqual(kwargs["headers"]["apikey"], "anon")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer anon")

    def test_insert_returns_representation(self) -> None:
        self.session.request.return_value = fake_response([{"id": 7, "time_seconds": 30}])
        row = self.client.insert("sudoku_scores", {"time_seconds": 30})
        self.assertEqual(row["id"], 7)
        kwargs = self.session.request.call_args.kwargs
        self.assertEqual(kwargs["headers"]["Prefer"], "return=representation")
        self.assertEqual(kwargs["json"], {"time_seconds": 30})

    def test_update_filters_by_column(self) -> None:
        self.session.request.return_value = fake_response([{"id": 7}])
        self.client.update("sudoku_scores", {"time_seconds": 20}, filters={"id": 7})
        method, _ = self.session.request.call_args.args
        self.assertEqual(method, "PATCH")
        self.assertEqual(self.session.request.call_args.kwargs["params"], {"id": "eq.7"})

    def test_empty_representation_raises(self) -> None:
        self.session.request.return_value = fake_response([])
        with self.assertRaises(BackendError):
            self.client.insert("sudoku_scores", {"time_seconds": 30})

    def test_transport_error_is_wrapped(self) -> None:
        self.session.request.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(BackendError):
            self.client.select("sudokus")

    def test_http_error_is_wrapped(self) -> None:
        response = fake_response({})
        response.raise_for_status.side_effect = requests.HTTPError("500")
        self.session.request.return_value = response
        with self.assertRaises(BackendError):
            self.client.select("sudokus")

    def test_non_json_body_is_wrapped(self) -> None:
        response = fake_response(None)
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "", 0)
        self.session.request.return_value = response
        with self.assertRaises(BackendError):
            self.client.select("sudokus")

    def test_non_json_body_blocks_session_load(self) -> None:
        response = fake_response(None)
        response.json.side_effect = ValueError("not json")
        self.session.request.return_value = response
        controller = SessionController(SupabaseBackend(self.client), "me")
        with self.assertRaises(PuzzleLoadError):
            controller.load()
        self.assertIsNotNone(controller.error)

    def test_from_env_requires_configuration(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigurationError):
                SupabaseClient.from_env()

    def test_from_env_accepts_public_names(self) -> None:
        env = {
            "NEXT_PUBLIC_SUPABASE_URL": "https://demo.supabase.co",
            "NEXT_PUBLIC_SUPABASE_ANON_KEY": "anon",
        }
        with patch.dict(os.environ, env, clear=True):
            client = SupabaseClient.from_env()
        self.assertEqual(client.url, "https://demo.supabase.co")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
