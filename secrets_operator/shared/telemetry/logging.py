"""Logging configuration for the operator process."""

import logging
import sys

from secrets_operator.core.config import get_settings


def setup_logging() -> None:
    """Configure process-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout so the kubelet captures it with the pod logs.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # The kubernetes client logs every request body at DEBUG.
    logging.getLogger("kubernetes").setLevel(logging.INFO)
