"""Settings validation and CoordinationConfig wiring."""

import pytest
from pydantic import ValidationError

from secrets_operator.core.config import CoordinationConfig, Settings, get_settings
from secrets_operator.core.constants import (
    ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED,
    LABEL_SELECTOR_CONTROL_PLANE,
    PRE_DELETE_HOOK_PROBE_PATH,
)


def test_defaults() -> None:
    settings = Settings()
    assert settings.control_plane_selector == LABEL_SELECTOR_CONTROL_PLANE
    assert settings.poll_interval_seconds == 0.3
    assert settings.pre_delete_probe_path == PRE_DELETE_HOOK_PROBE_PATH


def test_coordination_config_from_settings() -> None:
    config = CoordinationConfig.from_settings(Settings(poll_interval_seconds=1.5))
    assert config.poll_interval_seconds == 1.5
    assert config.annotation_credentials_revoked == ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED
    assert config.signal_value == "true"


@pytest.mark.parametrize(
    "overrides",
    [
        {"poll_interval_seconds": 0},
        {"pre_delete_hook_timeout_seconds": -1},
        {"control_plane_selector": "control-plane"},
        {"annotation_credentials_revoked": ""},
    ],
)
def test_invalid_settings(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("KUBE_NAMESPACE", "vso")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.poll_interval_seconds == 0.5
        assert settings.kube_namespace == "vso"
    finally:
        get_settings.cache_clear()
