"""Downward API file probe.

The pre-delete hook flips a pod annotation which the kubelet projects into
a file via the downward API; the manager reads that file to learn it must
shut down.
"""

import asyncio
from pathlib import Path

from secrets_operator.infrastructure.exceptions import LifecycleProbeException


class FileLifecycleProbe:
    """Reads a lifecycle probe file as raw text."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def read(self) -> str:
        """Return the file contents.

        Raises:
            LifecycleProbeException: If the file is missing or unreadable.
        """
        try:
            return await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LifecycleProbeException(str(self.path), str(e)) from e
