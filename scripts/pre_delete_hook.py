"""Pre-delete hook: tell every manager to shut down and wait for token revocation.

Runs as the Helm pre-delete hook job with the operator's service account.

Usage:
    python -m scripts.pre_delete_hook [timeout_seconds]
Exits 0 once any controller pod announces in-memory credentials revoked,
1 on timeout or if the pre-delete announcement failed.
"""

import asyncio
import logging
import sys

from secrets_operator.application.services import (
    AnnotationPublisher,
    RevocationCoordinator,
    ShutdownService,
)
from secrets_operator.core.config import CoordinationConfig, get_settings
from secrets_operator.domain.exceptions import AnnotationPublishException
from secrets_operator.infrastructure.k8s import KubernetesReplicaStore
from secrets_operator.infrastructure.lifecycle import FileLifecycleProbe
from secrets_operator.shared.telemetry.logging import setup_logging
from secrets_operator.shared.telemetry.telemetry import TelemetryConfig

logger = logging.getLogger("pre_delete_hook")


async def main() -> int:
    """Announce pre-delete and await revocation; return the process exit code."""
    settings = get_settings()
    timeout = settings.pre_delete_hook_timeout_seconds
    if len(sys.argv) > 1:
        try:
            timeout = float(sys.argv[1])
        except ValueError:
            print(
                "Usage: python -m scripts.pre_delete_hook [timeout_seconds]",
                file=sys.stderr,
            )
            return 1

    telemetry = TelemetryConfig(settings)
    telemetry.setup_telemetry()
    coordination = CoordinationConfig.from_settings(settings)
    store = KubernetesReplicaStore.from_settings(settings)
    service = ShutdownService(
        coordinator=RevocationCoordinator(
            store, FileLifecycleProbe(coordination.probe_path), coordination
        ),
        publisher=AnnotationPublisher(store, coordination),
    )
    try:
        revoked = await service.run_pre_delete_hook(timeout)
    except AnnotationPublishException as e:
        logger.error("Failed to announce pre-delete hook: %s", e.message)
        return 1
    finally:
        telemetry.shutdown()
    if not revoked:
        return 1
    logger.info("In-memory credentials revoked by the operator manager")
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(asyncio.run(main()))
