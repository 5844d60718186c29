"""Lightweight HTTP client for the Supabase REST (PostgREST) API."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional

import requests

from ..core.exceptions import BackendError, ConfigurationError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class SupabaseClient:
    """Minimal client around the PostgREST endpoints exposed by Supabase.

    The client is constructed explicitly and handed to whoever needs it;
    :meth:`from_env` is a convenience factory, not a shared instance.
    """

    REST_PATH = "/rest/v1"
    URL_ENVS = ("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
    KEY_ENVS = ("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not url or not api_key:
            raise ConfigurationError("Supabase URL and API key are both required")
        self.url = url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._api_key = api_key
        self._session = session or requests.Session()

    @classmethod
    def from_env(cls, timeout_seconds: float = 30.0) -> "SupabaseClient":
        url = _first_env(cls.URL_ENVS)
        api_key = _first_env(cls.KEY_ENVS)
        if not url or not api_key:
            raise ConfigurationError(
                "Missing Supabase configuration; set "
                f"{cls.URL_ENVS[0]} and {cls.KEY_ENVS[0]}"
            )
        return cls(url, api_key, timeout_seconds=timeout_seconds)

    # ------------------------------------------------------------------
    # Table operations
    # ------------------------------------------------------------------

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"select": columns}
        params.update(self._eq_filters(filters))
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = limit
        return self._request("GET", table, params=params)

    def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        rows = self._request(
            "POST",
            table,
            json=dict(row),
            headers={"Prefer": "return=representation"},
        )
        return self._single(rows, table)

    def update(
        self,
        table: str,
        values: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> Dict[str, Any]:
        rows = self._request(
            "PATCH",
            table,
            params=self._eq_filters(filters),
            json=dict(values),
            headers={"Prefer": "return=representation"},
        )
        return self._single(rows, table)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        url = f"{self.url}{self.REST_PATH}/{table}"
        request_headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
        }
        if headers:
            request_headers.update(headers)
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=request_headers,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise BackendError(f"Supabase {method} {table} failed: {exc}") from exc
        except ValueError as exc:
            raise BackendError(f"Supabase {method} {table} returned invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            LOGGER.warning("Unexpected Supabase payload for %s: %s", table, data)
            raise BackendError(f"Supabase returned a non-list payload for {table}")
        return data

    @staticmethod
    def _eq_filters(filters: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    @staticmethod
    def _single(rows: List[Dict[str, Any]], table: str) -> Dict[str, Any]:
        if not rows:
            raise BackendError(f"Supabase returned no row for {table}")
        return rows[0]


def _first_env(names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None
