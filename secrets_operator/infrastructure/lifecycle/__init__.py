"""Lifecycle: local probes written by Kubernetes lifecycle hooks."""

from secrets_operator.infrastructure.lifecycle.probe import FileLifecycleProbe

__all__ = ["FileLifecycleProbe"]
