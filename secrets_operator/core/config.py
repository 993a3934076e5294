"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Coordination values default to the literals in
secrets_operator.core.constants and are validated at load time.
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from secrets_operator.core.constants import (
    ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED,
    ANNOTATION_PRE_DELETE_HOOK_STARTED,
    LABEL_SELECTOR_CONTROL_PLANE,
    POLL_INTERVAL_SECONDS,
    PRE_DELETE_HOOK_PROBE_PATH,
    STRING_TRUE,
)
from secrets_operator.domain.exceptions import InvalidLabelSelectorException
from secrets_operator.shared.utils.selectors import parse_label_selector


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults suitable for running inside the controller
    pod. validate_coordination rejects values that would make the replica
    watchers spin or never match.
    """

    # App
    app_name: str = "secrets-operator"
    app_version: str = "0.1.0"
    debug: bool = False

    # Kubernetes API
    # Empty namespace lists controller pods across all namespaces.
    kube_namespace: str = ""
    kube_in_cluster: bool = True
    kube_request_timeout_seconds: float | None = None

    # Replica coordination
    control_plane_selector: str = LABEL_SELECTOR_CONTROL_PLANE
    annotation_pre_delete_hook_started: str = ANNOTATION_PRE_DELETE_HOOK_STARTED
    annotation_credentials_revoked: str = ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED
    signal_value: str = STRING_TRUE
    pre_delete_probe_path: str = PRE_DELETE_HOOK_PROBE_PATH
    poll_interval_seconds: float = POLL_INTERVAL_SECONDS
    pre_delete_hook_timeout_seconds: float = 120.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_coordination(self) -> "Settings":
        """Validate poll interval, hook timeout, and the control-plane selector."""
        if self.poll_interval_seconds <= 0:
            raise ValueError(
                f"poll_interval_seconds must be positive, got: {self.poll_interval_seconds!r}"
            )
        if self.pre_delete_hook_timeout_seconds <= 0:
            raise ValueError(
                "pre_delete_hook_timeout_seconds must be positive, "
                f"got: {self.pre_delete_hook_timeout_seconds!r}"
            )
        try:
            parse_label_selector(self.control_plane_selector)
        except InvalidLabelSelectorException as e:
            raise ValueError(e.message) from e
        if not self.annotation_pre_delete_hook_started or not self.annotation_credentials_revoked:
            raise ValueError("Coordination annotation keys must be non-empty")
        return self


@dataclass(frozen=True)
class CoordinationConfig:
    """Explicit coordination values injected into watchers and publishers.

    Built from Settings in production; tests construct it directly with a
    short poll interval.
    """

    label_selector: str = LABEL_SELECTOR_CONTROL_PLANE
    annotation_pre_delete_hook_started: str = ANNOTATION_PRE_DELETE_HOOK_STARTED
    annotation_credentials_revoked: str = ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED
    signal_value: str = STRING_TRUE
    probe_path: str = PRE_DELETE_HOOK_PROBE_PATH
    poll_interval_seconds: float = POLL_INTERVAL_SECONDS

    @classmethod
    def from_settings(cls, settings: Settings) -> "CoordinationConfig":
        """Return the coordination slice of the application settings."""
        return cls(
            label_selector=settings.control_plane_selector,
            annotation_pre_delete_hook_started=settings.annotation_pre_delete_hook_started,
            annotation_credentials_revoked=settings.annotation_credentials_revoked,
            signal_value=settings.signal_value,
            probe_path=settings.pre_delete_probe_path,
            poll_interval_seconds=settings.poll_interval_seconds,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
