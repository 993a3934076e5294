"""Application lifespan: startup and shutdown.

Startup builds the coordination services from settings and starts the
pre-delete watcher. When the watcher sees the pre-delete hook signal it
marks the app not-ready and asks the server to stop (SIGTERM), which runs
the shutdown half: cached clients are revoked and the revocation is
announced to every controller replica.
"""

import asyncio
import logging
import signal
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI

from secrets_operator.application.services import (
    AnnotationPublisher,
    RevocationCoordinator,
    ShutdownService,
)
from secrets_operator.core.config import CoordinationConfig, get_settings
from secrets_operator.domain.exceptions import AnnotationPublishException
from secrets_operator.infrastructure.cache import ClientCache
from secrets_operator.infrastructure.k8s import KubernetesReplicaStore
from secrets_operator.infrastructure.lifecycle import FileLifecycleProbe
from secrets_operator.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


def register_client_revoker(app: FastAPI, revoke: Callable[[Any], Awaitable[None]]) -> None:
    """Set the callback that revokes one cached client at shutdown.

    Must be called before the app starts. Without it, shutdown only drops
    cached clients and logs a warning before announcing revocation.
    """
    app.state.revoke_client = revoke


def _request_shutdown(app: FastAPI) -> None:
    """Mark the app as shutting down and stop the server gracefully."""
    app.state.shutting_down.set()
    logger.info("Pre-delete hook started, stopping operator manager")
    signal.raise_signal(signal.SIGTERM)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), client cache, replica store,
    coordination services, pre-delete watcher. Shutdown order: stop the
    watcher, revoke and announce (only after a pre-delete signal),
    telemetry shutdown.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.telemetry_enabled:
        telemetry = TelemetryConfig(settings)
        telemetry.setup_telemetry()
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()

    coordination = CoordinationConfig.from_settings(settings)
    store = KubernetesReplicaStore.from_settings(settings)
    app.state.shutting_down = asyncio.Event()
    app.state.client_cache = ClientCache()
    app.state.shutdown_service = ShutdownService(
        coordinator=RevocationCoordinator(
            store, FileLifecycleProbe(coordination.probe_path), coordination
        ),
        publisher=AnnotationPublisher(store, coordination),
        cache=app.state.client_cache,
        revoke=getattr(app.state, "revoke_client", None),
    )
    stop_watcher = asyncio.Event()
    watcher_task = asyncio.create_task(
        app.state.shutdown_service.watch_for_pre_delete(
            stop_watcher, lambda: _request_shutdown(app)
        )
    )
    logger.info("Pre-delete watcher started on %s", coordination.probe_path)

    yield

    # ---- Shutdown ----
    stop_watcher.set()
    await watcher_task
    logger.info("Pre-delete watcher stopped")

    if app.state.shutting_down.is_set():
        try:
            revoked = await app.state.shutdown_service.revoke_and_announce()
            logger.info("Revoked %d cached client(s) and announced revocation", revoked)
        except AnnotationPublishException as e:
            logger.error("Failed to announce credentials revoked: %s", e.message)

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
