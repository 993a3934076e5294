"""Replica revocation coordination watchers.

Two cooperative polling loops used during operator shutdown:

- await_pre_delete_started: watches the local lifecycle probe written by the
  pre-delete hook (downward API) and fires a shutdown handler once.
- await_credentials_revoked: watches controller pod annotations until any
  replica announces that its in-memory credentials were revoked.

Coordination state lives only in the cluster object store and the local
probe, so no leader or lock is needed and a restarted replica simply
resumes polling. Transient read/list errors are logged and retried until
the caller's cancellation token fires; there is no failed state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from secrets_operator.application.interfaces import ILifecycleProbe, IReplicaStore
from secrets_operator.core.config import CoordinationConfig
from secrets_operator.domain.enums import WatchOutcome
from secrets_operator.infrastructure.exceptions import (
    LifecycleProbeException,
    ReplicaStoreException,
)
from secrets_operator.shared.utils.selectors import parse_label_selector, selector_matches

logger = logging.getLogger(__name__)


async def _sleep_or_cancel(cancel: asyncio.Event, interval: float) -> None:
    """Sleep for interval, returning early if cancel is set."""
    try:
        await asyncio.wait_for(cancel.wait(), timeout=interval)
    except asyncio.TimeoutError:
        pass


class RevocationCoordinator:
    """Polls for pre-delete and credentials-revoked signals.

    The cancellation token is checked at the top of every iteration and
    takes priority over starting another read or list. A call already in
    flight is not interrupted; its result is discarded if the token fired.
    """

    def __init__(
        self,
        store: IReplicaStore,
        probe: ILifecycleProbe,
        config: CoordinationConfig | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            store: Replica store used to list controller pods.
            probe: Local lifecycle probe.
            config: Coordination values; defaults to the built-in constants.

        Raises:
            InvalidLabelSelectorException: If config.label_selector is malformed.
        """
        self.store = store
        self.probe = probe
        self.config = config or CoordinationConfig()
        self._requirements = parse_label_selector(self.config.label_selector)

    async def await_pre_delete_started(
        self,
        cancel: asyncio.Event,
        handler: Callable[[], None],
    ) -> WatchOutcome:
        """Wait for the pre-delete hook signal on the local probe.

        Args:
            cancel: Cancellation token; when set the watcher stops without
                calling handler.
            handler: Called exactly once when the probe reads the signal value.

        Returns:
            SATISFIED after handler ran, CANCELLED if the token fired first.
        """
        path = self.config.probe_path
        while True:
            if cancel.is_set():
                logger.error(
                    "Operator manager context canceled. Stopping %s watcher", path
                )
                return WatchOutcome.CANCELLED
            try:
                content = await self.probe.read()
            except LifecycleProbeException as e:
                logger.error("Failed to read downward API exposed file: %s", e.message)
            else:
                if cancel.is_set():
                    continue
                if content.strip() == self.config.signal_value:
                    logger.info(
                        "Pre-delete hook started: %s=%s",
                        self.config.annotation_pre_delete_hook_started,
                        self.config.signal_value,
                    )
                    handler()
                    return WatchOutcome.SATISFIED
            await _sleep_or_cancel(cancel, self.config.poll_interval_seconds)

    async def await_credentials_revoked(self, cancel: asyncio.Event) -> WatchOutcome:
        """Wait until any controller replica announces credentials revoked.

        Args:
            cancel: Cancellation token.

        Returns:
            SATISFIED when an annotated replica is seen, CANCELLED if the
            token fired first.
        """
        key = self.config.annotation_credentials_revoked
        selector = self.config.label_selector
        while True:
            if cancel.is_set():
                logger.error(
                    "Cancelled while awaiting %s on pods matching %s", key, selector
                )
                return WatchOutcome.CANCELLED
            try:
                replicas = await self.store.list_replicas(selector)
            except ReplicaStoreException as e:
                logger.error("Failed to get pod list (selector=%s): %s", selector, e.message)
            else:
                if cancel.is_set():
                    continue
                for replica in replicas:
                    if not selector_matches(self._requirements, replica.labels):
                        continue
                    if replica.has_annotation(key, self.config.signal_value):
                        logger.info(
                            "Operator pod annotations updated: %s=%s (pod=%s)",
                            key,
                            self.config.signal_value,
                            replica.name,
                        )
                        return WatchOutcome.SATISFIED
                logger.debug("No pod matching %s carries %s yet", selector, key)
            await _sleep_or_cancel(cancel, self.config.poll_interval_seconds)
