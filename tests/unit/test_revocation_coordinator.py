"""RevocationCoordinator: pre-delete probe watcher and credentials-revoked watcher."""

import asyncio
from unittest.mock import MagicMock

import pytest
from kubernetes.client import V1ObjectMeta, V1Pod, V1PodList
from urllib3.exceptions import MaxRetryError

from secrets_operator.application.services.revocation_coordinator import (
    RevocationCoordinator,
)
from secrets_operator.core.config import CoordinationConfig
from secrets_operator.core.constants import ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED
from secrets_operator.domain.enums import WatchOutcome
from secrets_operator.domain.exceptions import InvalidLabelSelectorException
from secrets_operator.infrastructure.k8s import KubernetesReplicaStore
from tests.fakes import FakeProbe, FakeReplicaStore, make_replica, probe_error

REVOKED = {ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED: "true"}


def _cancel_after(cancel: asyncio.Event, seconds: float) -> None:
    asyncio.get_running_loop().call_later(seconds, cancel.set)


class TestAwaitPreDeleteStarted:
    @pytest.mark.asyncio
    async def test_read_errors_are_retried_until_signal(
        self, coordination_config: CoordinationConfig
    ) -> None:
        probe = FakeProbe([probe_error(), probe_error(), "true"])
        handler = MagicMock()
        coordinator = RevocationCoordinator(FakeReplicaStore(), probe, coordination_config)

        outcome = await coordinator.await_pre_delete_started(asyncio.Event(), handler)

        assert outcome is WatchOutcome.SATISFIED
        handler.assert_called_once_with()
        assert probe.reads == 3

    @pytest.mark.asyncio
    async def test_non_signal_content_keeps_polling(
        self, coordination_config: CoordinationConfig
    ) -> None:
        probe = FakeProbe(["", "false", "true\n"])
        handler = MagicMock()
        coordinator = RevocationCoordinator(FakeReplicaStore(), probe, coordination_config)

        outcome = await coordinator.await_pre_delete_started(asyncio.Event(), handler)

        assert outcome is WatchOutcome.SATISFIED
        handler.assert_called_once_with()
        assert probe.reads == 3

    @pytest.mark.asyncio
    async def test_already_cancelled_does_not_read(
        self, coordination_config: CoordinationConfig
    ) -> None:
        probe = FakeProbe(["true"])
        handler = MagicMock()
        cancel = asyncio.Event()
        cancel.set()
        coordinator = RevocationCoordinator(FakeReplicaStore(), probe, coordination_config)

        outcome = await coordinator.await_pre_delete_started(cancel, handler)

        assert outcome is WatchOutcome.CANCELLED
        handler.assert_not_called()
        assert probe.reads == 0

    @pytest.mark.asyncio
    async def test_cancel_while_polling(self, coordination_config: CoordinationConfig) -> None:
        probe = FakeProbe([probe_error()])
        handler = MagicMock()
        cancel = asyncio.Event()
        coordinator = RevocationCoordinator(FakeReplicaStore(), probe, coordination_config)

        _cancel_after(cancel, 0.05)
        outcome = await asyncio.wait_for(
            coordinator.await_pre_delete_started(cancel, handler), timeout=2
        )

        assert outcome is WatchOutcome.CANCELLED
        handler.assert_not_called()
        assert probe.reads >= 1


class TestAwaitCredentialsRevoked:
    @pytest.mark.asyncio
    async def test_satisfied_by_any_annotated_replica(
        self, coordination_config: CoordinationConfig
    ) -> None:
        store = FakeReplicaStore(
            [make_replica("pod-a"), make_replica("pod-b", annotations=REVOKED)]
        )
        coordinator = RevocationCoordinator(store, FakeProbe([""]), coordination_config)

        outcome = await coordinator.await_credentials_revoked(asyncio.Event())

        assert outcome is WatchOutcome.SATISFIED
        assert store.list_calls == 1

    @pytest.mark.asyncio
    async def test_list_errors_are_retried(self, coordination_config: CoordinationConfig) -> None:
        store = FakeReplicaStore([make_replica("pod-a", annotations=REVOKED)], list_failures=2)
        coordinator = RevocationCoordinator(store, FakeProbe([""]), coordination_config)

        outcome = await coordinator.await_credentials_revoked(asyncio.Event())

        assert outcome is WatchOutcome.SATISFIED
        assert store.list_calls == 3

    @pytest.mark.asyncio
    async def test_no_signal_exits_only_on_cancel_without_side_effects(
        self, coordination_config: CoordinationConfig
    ) -> None:
        store = FakeReplicaStore(
            [
                make_replica("pod-a"),
                make_replica("pod-b", annotations={ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED: "false"}),
                # Annotated, but not a controller replica.
                make_replica("other", annotations=REVOKED, labels={"app": "other"}),
            ]
        )
        cancel = asyncio.Event()
        coordinator = RevocationCoordinator(store, FakeProbe([""]), coordination_config)

        _cancel_after(cancel, 0.05)
        outcome = await asyncio.wait_for(coordinator.await_credentials_revoked(cancel), timeout=2)

        assert outcome is WatchOutcome.CANCELLED
        assert store.list_calls >= 2
        assert store.patch_calls == []

    @pytest.mark.asyncio
    async def test_result_discarded_when_cancelled_during_list(
        self, coordination_config: CoordinationConfig
    ) -> None:
        cancel = asyncio.Event()

        class CancellingStore(FakeReplicaStore):
            async def list_replicas(self, label_selector: str):
                cancel.set()
                return await super().list_replicas(label_selector)

        store = CancellingStore([make_replica("pod-a", annotations=REVOKED)])
        coordinator = RevocationCoordinator(store, FakeProbe([""]), coordination_config)

        outcome = await coordinator.await_credentials_revoked(cancel)

        assert outcome is WatchOutcome.CANCELLED
        assert store.list_calls == 1

    @pytest.mark.asyncio
    async def test_cancel_interrupts_poll_interval(self) -> None:
        config = CoordinationConfig(poll_interval_seconds=30)
        cancel = asyncio.Event()
        coordinator = RevocationCoordinator(
            FakeReplicaStore([make_replica("pod-a")]), FakeProbe([""]), config
        )

        _cancel_after(cancel, 0.05)
        outcome = await asyncio.wait_for(coordinator.await_credentials_revoked(cancel), timeout=2)

        assert outcome is WatchOutcome.CANCELLED

    @pytest.mark.asyncio
    async def test_unreachable_api_server_is_retried(
        self, coordination_config: CoordinationConfig
    ) -> None:
        api = MagicMock()
        revoked_pod = V1Pod(
            metadata=V1ObjectMeta(
                name="pod-a",
                namespace="vault-secrets-operator-system",
                labels={"control-plane": "controller-manager"},
                annotations=REVOKED,
            )
        )
        api.list_namespaced_pod.side_effect = [
            MaxRetryError(None, "/api/v1/namespaces/vault-secrets-operator-system/pods"),
            V1PodList(items=[revoked_pod]),
        ]
        store = KubernetesReplicaStore(api=api, namespace="vault-secrets-operator-system")
        coordinator = RevocationCoordinator(store, FakeProbe([""]), coordination_config)

        outcome = await asyncio.wait_for(
            coordinator.await_credentials_revoked(asyncio.Event()), timeout=2
        )

        assert outcome is WatchOutcome.SATISFIED
        assert api.list_namespaced_pod.call_count == 2

    @pytest.mark.asyncio
    async def test_unreachable_api_server_until_cancel(
        self, coordination_config: CoordinationConfig
    ) -> None:
        api = MagicMock()
        api.list_namespaced_pod.side_effect = MaxRetryError(None, "/api/v1/pods")
        store = KubernetesReplicaStore(api=api, namespace="vault-secrets-operator-system")
        cancel = asyncio.Event()
        coordinator = RevocationCoordinator(store, FakeProbe([""]), coordination_config)

        _cancel_after(cancel, 0.05)
        outcome = await asyncio.wait_for(coordinator.await_credentials_revoked(cancel), timeout=2)

        assert outcome is WatchOutcome.CANCELLED
        assert api.list_namespaced_pod.call_count >= 2

    @pytest.mark.asyncio
    async def test_unselected_pod_from_store_does_not_satisfy(
        self, coordination_config: CoordinationConfig
    ) -> None:
        store = FakeReplicaStore(
            [make_replica("webhook", annotations=REVOKED, labels={"app": "webhook"})],
            filter_by_selector=False,
        )
        cancel = asyncio.Event()
        coordinator = RevocationCoordinator(store, FakeProbe([""]), coordination_config)

        _cancel_after(cancel, 0.05)
        outcome = await asyncio.wait_for(coordinator.await_credentials_revoked(cancel), timeout=2)

        assert outcome is WatchOutcome.CANCELLED


def test_invalid_selector_rejected_at_construction() -> None:
    with pytest.raises(InvalidLabelSelectorException):
        RevocationCoordinator(
            FakeReplicaStore(), FakeProbe([""]), CoordinationConfig(label_selector="control-plane")
        )
