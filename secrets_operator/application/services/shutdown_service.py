"""Operator shutdown orchestration.

Uninstall sequence across the replica group:

1. The pre-delete hook job annotates every controller pod with
   pre-delete-hook-started (run_pre_delete_hook).
2. The kubelet projects that annotation into each pod's downward API file;
   each manager sees it (watch_for_pre_delete) and starts shutting down.
3. A shutting-down manager revokes its cached clients and annotates every
   pod with in-memory-vault-tokens-revoked (revoke_and_announce).
4. The hook job observes that annotation on any pod and exits, or gives
   up after its timeout.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from secrets_operator.application.services.annotation_publisher import AnnotationPublisher
from secrets_operator.application.services.revocation_coordinator import (
    RevocationCoordinator,
)
from secrets_operator.domain.enums import WatchOutcome
from secrets_operator.infrastructure.cache import ClientCache
from secrets_operator.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class ShutdownService:
    """Wires the coordinator, publisher, and client cache into the shutdown flows."""

    def __init__(
        self,
        coordinator: RevocationCoordinator,
        publisher: AnnotationPublisher,
        cache: ClientCache[Any] | None = None,
        revoke: Callable[[Any], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            coordinator: Watchers for the pre-delete and revoked signals.
            publisher: Broadcasts coordination annotations.
            cache: Client cache purged on shutdown.
            revoke: Default per-client revocation callback (e.g. revoke the
                client's token with the secrets engine).
        """
        self.coordinator = coordinator
        self.publisher = publisher
        self.cache = cache
        self.revoke = revoke

    @traced("shutdown.pre_delete_hook")
    async def run_pre_delete_hook(self, timeout_seconds: float) -> bool:
        """Announce the pre-delete hook and wait for credentials to be revoked.

        Args:
            timeout_seconds: How long to wait for any replica to announce revocation.

        Returns:
            True if revocation was observed, False on timeout.

        Raises:
            AnnotationPublishException: If announcing the hook failed on any replica.
        """
        await self.publisher.announce_pre_delete_hook_started()
        cancel = asyncio.Event()
        timer = asyncio.get_running_loop().call_later(timeout_seconds, cancel.set)
        try:
            outcome = await self.coordinator.await_credentials_revoked(cancel)
        finally:
            timer.cancel()
        if outcome is WatchOutcome.SATISFIED:
            return True
        logger.error(
            "Timed out after %ss waiting for in-memory credentials to be revoked",
            timeout_seconds,
        )
        return False

    async def watch_for_pre_delete(
        self, cancel: asyncio.Event, on_shutdown: Callable[[], None]
    ) -> WatchOutcome:
        """Run the manager-side pre-delete watcher until signalled or cancelled."""
        return await self.coordinator.await_pre_delete_started(cancel, on_shutdown)

    @traced("shutdown.revoke_and_announce")
    async def revoke_and_announce(
        self, revoke: Callable[[Any], Awaitable[None]] | None = None
    ) -> int:
        """Revoke every cached client, then announce revocation to all replicas.

        Args:
            revoke: Per-client revocation callback overriding the one given
                at construction; without either, entries are only dropped
                from the cache.

        Returns:
            Number of clients purged from the cache.

        Raises:
            AnnotationPublishException: If the announcement failed on any replica.
        """
        revoke = revoke or self.revoke
        if revoke is None and self.cache:
            logger.warning(
                "No client revocation callback configured; dropping %d cached "
                "client(s) without revoking their tokens",
                len(self.cache),
            )
        purged = await self.cache.purge(revoke) if self.cache is not None else 0
        await self.publisher.announce_credentials_revoked()
        return purged
