"""Core: config, constants, and application bootstrap.

Single place for settings and shared constants.
"""

from secrets_operator.core.config import CoordinationConfig, Settings, get_settings

__all__ = ["CoordinationConfig", "Settings", "get_settings"]
