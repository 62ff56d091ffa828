"""Session-scoped key-value storage for pending authorizations.

Between the login redirect and the callback the code verifier is kept in
a store keyed by the ``state`` parameter. Entries live until consumed by
the callback or until the session ends.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionStore(Protocol):
    """Protocol for the store holding code verifiers keyed by state.

    Implementations may be synchronous or return awaitables from each
    method; callers resolve either form with ``resolve``.
    """

    def set(self, key: str, value: str) -> None | Awaitable[None]: ...

    def get(self, key: str) -> str | None | Awaitable[str | None]: ...

    def delete(self, key: str) -> None | Awaitable[None]: ...


async def resolve(value: T | Awaitable[T]) -> T:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass
class _Entry:
    value: str
    created_at: float


class InMemorySessionStore:
    """Dict-backed session store with an optional time-to-live.

    Expired entries read as absent and are dropped on access. ``clear``
    ends the session.
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the store.

        Args:
            ttl_seconds: Seconds an entry stays readable, or None for no expiry
            clock: Monotonic time source
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def set(self, key: str, value: str) -> None:
        self._purge_expired()
        self._entries[key] = _Entry(value=value, created_at=self._clock())

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            logger.debug("Stored verifier expired before callback")
            del self._entries[key]
            return None
        return entry.value

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def _is_expired(self, entry: _Entry) -> bool:
        if self.ttl_seconds is None:
            return False
        return (self._clock() - entry.created_at) > self.ttl_seconds

    def _purge_expired(self) -> None:
        expired = [k for k, e in self._entries.items() if self._is_expired(e)]
        for key in expired:
            del self._entries[key]
