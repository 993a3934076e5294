"""In-memory cache of authenticated clients keyed by ClientCacheKey.

Entries live only as long as the process; their keys are never persisted.
Removing a root key also removes every clone derived from it.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from secrets_operator.domain.value_objects import ClientCacheKey

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientCache(Generic[T]):
    """In-memory client cache (single event loop, no locking)."""

    def __init__(self) -> None:
        self._entries: dict[ClientCacheKey, T] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[ClientCacheKey]:
        """Return cached keys in insertion order."""
        return list(self._entries)

    def get(self, key: ClientCacheKey) -> T | None:
        """Return the cached client or None."""
        client = self._entries.get(key)
        logger.debug("Client cache %s: %s", "HIT" if client is not None else "MISS", key)
        return client

    def add(self, key: ClientCacheKey, client: T) -> None:
        """Store client under key, replacing any previous entry."""
        self._entries[key] = client
        logger.debug("Client cache SET: %s", key)

    def remove(self, key: ClientCacheKey) -> list[ClientCacheKey]:
        """Remove key; for a root key also remove its clones.

        Returns:
            Keys that were removed.
        """
        removed = [key] if key in self._entries else []
        if not key.is_clone():
            removed.extend(
                k for k in self._entries if k != key and k.is_clone() and k.root() == key
            )
        for k in removed:
            del self._entries[k]
        if removed:
            logger.debug("Client cache removed %d entr(ies) for %s", len(removed), key)
        return removed

    async def purge(self, revoke: Callable[[T], Awaitable[None]] | None = None) -> int:
        """Remove every entry, revoking each client first when revoke is given.

        A failed revocation is logged and does not stop the purge.

        Returns:
            Number of clients revoked successfully (entries removed when revoke is None).
        """
        entries = list(self._entries.items())
        self._entries.clear()
        if revoke is None:
            return len(entries)
        revoked = 0
        for key, client in entries:
            try:
                await revoke(client)
            except Exception:
                logger.exception("Failed to revoke cached client %s", key)
            else:
                revoked += 1
        logger.info("Revoked %d/%d cached client(s)", revoked, len(entries))
        return revoked
