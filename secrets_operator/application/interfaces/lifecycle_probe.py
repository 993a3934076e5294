"""Lifecycle probe interface (port)."""

from typing import Protocol


class ILifecycleProbe(Protocol):
    """Local probe fed by the orchestration platform's lifecycle hooks."""

    async def read(self) -> str:
        """Return the raw probe contents.

        Raises:
            LifecycleProbeException: If the probe cannot be read.
        """
        ...
