"""Broadcast of coordination annotations to every controller replica.

Patches are applied one replica at a time and are not transactional: a
failure on one replica does not stop the others, so after a partial
failure some replicas carry the signal and others do not. Watchers on
any replica observe the signal as soon as one annotated replica is listed.
"""

from __future__ import annotations

import logging

from secrets_operator.application.interfaces import IReplicaStore
from secrets_operator.core.config import CoordinationConfig
from secrets_operator.domain.exceptions import AnnotationPublishException
from secrets_operator.infrastructure.exceptions import ReplicaStoreException
from secrets_operator.shared.telemetry.tracing import add_span_attributes, traced
from secrets_operator.shared.utils.selectors import parse_label_selector, selector_matches

logger = logging.getLogger(__name__)


class AnnotationPublisher:
    """Merges annotations into all replicas matching the control-plane selector."""

    def __init__(self, store: IReplicaStore, config: CoordinationConfig | None = None) -> None:
        """Initialize the publisher.

        Raises:
            InvalidLabelSelectorException: If config.label_selector is malformed.
        """
        self.store = store
        self.config = config or CoordinationConfig()
        self._requirements = parse_label_selector(self.config.label_selector)

    @traced("annotations.publish")
    async def publish(self, annotations: dict[str, str]) -> None:
        """Merge annotations into every controller replica.

        Args:
            annotations: Annotation key/value pairs to set.

        Raises:
            AnnotationPublishException: If listing failed (nothing attempted)
                or one or more patches failed (all replicas attempted).
        """
        selector = self.config.label_selector
        try:
            replicas = await self.store.list_replicas(selector)
        except ReplicaStoreException as e:
            raise AnnotationPublishException({}, message=e.message) from e
        # Only replicas carrying every selector label are annotated.
        replicas = [r for r in replicas if selector_matches(self._requirements, r.labels)]

        failures: dict[str, str] = {}
        for replica in replicas:
            try:
                await self.store.patch_annotations(replica, annotations)
            except ReplicaStoreException as e:
                logger.warning("Failed to annotate pod %s: %s", replica.name, e.message)
                failures[replica.name] = e.message
            else:
                logger.debug("Annotated pod %s with %s", replica.name, sorted(annotations))
        add_span_attributes(
            replicas=len(replicas), failed_replicas=len(failures)
        )
        if failures:
            raise AnnotationPublishException(failures)
        logger.info(
            "Annotated %d pod(s) matching %s with %s",
            len(replicas),
            selector,
            ", ".join(f"{k}={v}" for k, v in annotations.items()),
        )

    async def announce_pre_delete_hook_started(self) -> None:
        """Announce to all replicas that the pre-delete hook has started."""
        await self.publish(
            {self.config.annotation_pre_delete_hook_started: self.config.signal_value}
        )

    async def announce_credentials_revoked(self) -> None:
        """Announce to all replicas that in-memory credentials were revoked."""
        await self.publish(
            {self.config.annotation_credentials_revoked: self.config.signal_value}
        )
