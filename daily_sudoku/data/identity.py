"""Player nickname resolution.

A nickname is resolved by trying an ordered list of strategies: an external
identity provider, then the locally persisted nickname, then a fresh
timestamp-derived one. The first success is persisted for reuse.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

from ..core.exceptions import IdentityResolutionError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_NICKNAME_FILE = Path("local_db/nickname.json")
NICKNAME_KEY = "sudoku_nickname"


class NicknameStore:
    """Persist the resolved nickname in a small JSON document."""

    def __init__(self, path: Path | str = DEFAULT_NICKNAME_FILE) -> None:
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            LOGGER.warning("Nickname store read error (%s): %s", self.path.name, exc)
            return None
        nickname = doc.get(NICKNAME_KEY) if isinstance(doc, dict) else None
        return nickname or None

    def save(self, nickname: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({NICKNAME_KEY: nickname}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class IdentityResolver(Protocol):
    """Protocol implemented by all nickname strategies."""

    def resolve(self) -> str:
        ...


class ExternalIdentityResolver:
    """Ask an external identity provider for the player's alias."""

    def __init__(self, provider: Callable[[], Optional[str]], name: str = "external") -> None:
        self.provider = provider
        self.name = name

    def resolve(self) -> str:
        alias = self.provider()
        if not alias:
            raise IdentityResolutionError(f"{self.name} provider returned no alias")
        return alias

    def __repr__(self) -> str:
        return f"ExternalIdentityResolver({self.name})"


class StoredNicknameResolver:
    """Reuse the nickname persisted by a previous session."""

    def __init__(self, store: NicknameStore) -> None:
        self.store = store

    def resolve(self) -> str:
        nickname = self.store.load()
        if not nickname:
            raise IdentityResolutionError(f"No nickname stored in {self.store.path}")
        return nickname

    def __repr__(self) -> str:
        return "StoredNicknameResolver()"


class TimestampNicknameResolver:
    """Generate ``Player_YYYYMMDDHHMMSS`` from the local clock."""

    PREFIX = "Player_"

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self.clock = clock

    def resolve(self) -> str:
        return f"{self.PREFIX}{self.clock().strftime('%Y%m%d%H%M%S')}"

    def __repr__(self) -> str:
        return "TimestampNicknameResolver()"


def default_resolvers(
    store: NicknameStore,
    provider: Optional[Callable[[], Optional[str]]] = None,
) -> List[IdentityResolver]:
    resolvers: List[IdentityResolver] = []
    if provider is not None:
        resolvers.append(ExternalIdentityResolver(provider))
    resolvers.append(StoredNicknameResolver(store))
    resolvers.append(TimestampNicknameResolver())
    return resolvers


def resolve_identity(resolvers: Sequence[IdentityResolver], store: NicknameStore) -> str:
    """Return the first nickname any resolver produces and persist it."""

    for resolver in resolvers:
        try:
            nickname = resolver.resolve()
        except Exception as exc:
            LOGGER.warning("Identity resolver %r failed: %s", resolver, exc)
            continue
        LOGGER.info("Resolved player identity %s via %r", nickname, resolver)
        try:
            store.save(nickname)
        except OSError as exc:
            LOGGER.warning("Could not persist nickname %s: %s", nickname, exc)
        return nickname
    raise IdentityResolutionError("No identity resolver produced a nickname")


__all__ = [
    "NicknameStore",
    "IdentityResolver",
    "ExternalIdentityResolver",
    "StoredNicknameResolver",
    "TimestampNicknameResolver",
    "default_resolvers",
    "resolve_identity",
]
