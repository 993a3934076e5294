"""Kubernetes-backed replica store.

Controller replicas are the manager pods selected by the control-plane
label. The official kubernetes client is synchronous, so every call runs
in a worker thread to keep the event loop (and the probe endpoints)
responsive while a watcher is waiting on the API server.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from kubernetes import client, config
from kubernetes.client import ApiException, CoreV1Api, V1Pod
from urllib3.exceptions import HTTPError

from secrets_operator.core.config import Settings
from secrets_operator.domain.entities import ReplicaDescriptor
from secrets_operator.infrastructure.exceptions import ReplicaStoreException

logger = logging.getLogger(__name__)

MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"


def _reason(e: ApiException) -> str:
    return f"({e.status}) {e.reason}" if e.status else str(e)


def replica_from_pod(pod: V1Pod) -> ReplicaDescriptor:
    """Convert a V1Pod into a ReplicaDescriptor."""
    metadata = pod.metadata
    return ReplicaDescriptor(
        name=metadata.name or "",
        namespace=metadata.namespace or "",
        labels=dict(metadata.labels or {}),
        annotations=dict(metadata.annotations or {}),
    )


class KubernetesReplicaStore:
    """Lists and annotates controller pods through the Kubernetes API."""

    def __init__(
        self,
        api: CoreV1Api | None = None,
        namespace: str = "",
        request_timeout: float | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            api: CoreV1Api client; a default one is created when omitted
                (kube config must already be loaded).
            namespace: Namespace the controller runs in; empty lists pods in
                all namespaces.
            request_timeout: Optional per-request timeout in seconds.
        """
        self.api = api or client.CoreV1Api()
        self.namespace = namespace
        self.request_timeout = request_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> KubernetesReplicaStore:
        """Load in-cluster (or local kubeconfig) credentials and build a store."""
        if settings.kube_in_cluster:
            config.load_incluster_config()
        else:
            config.load_kube_config()
        return cls(
            namespace=settings.kube_namespace,
            request_timeout=settings.kube_request_timeout_seconds,
        )

    def _request_kwargs(self) -> dict[str, Any]:
        if self.request_timeout is None:
            return {}
        return {"_request_timeout": self.request_timeout}

    def _list(self, label_selector: str) -> list[ReplicaDescriptor]:
        if self.namespace:
            pods = self.api.list_namespaced_pod(
                namespace=self.namespace,
                label_selector=label_selector,
                **self._request_kwargs(),
            )
        else:
            pods = self.api.list_pod_for_all_namespaces(
                label_selector=label_selector,
                **self._request_kwargs(),
            )
        return [replica_from_pod(pod) for pod in pods.items or []]

    async def list_replicas(self, label_selector: str) -> list[ReplicaDescriptor]:
        """Return controller pods matching label_selector.

        Raises:
            ReplicaStoreException: If the API call fails or the API server
                is unreachable.
        """
        try:
            return await asyncio.to_thread(self._list, label_selector)
        except ApiException as e:
            raise ReplicaStoreException("list", _reason(e), status=e.status) from e
        except (HTTPError, OSError) as e:
            raise ReplicaStoreException("list", str(e)) from e

    def _patch(self, replica: ReplicaDescriptor, annotations: dict[str, str]) -> None:
        self.api.patch_namespaced_pod(
            name=replica.name,
            namespace=replica.namespace or self.namespace,
            body={"metadata": {"annotations": dict(annotations)}},
            _content_type=MERGE_PATCH_CONTENT_TYPE,
            **self._request_kwargs(),
        )

    async def patch_annotations(
        self, replica: ReplicaDescriptor, annotations: dict[str, str]
    ) -> None:
        """Merge-patch annotations onto the replica's pod.

        Only the given keys are sent; other annotations are left untouched.

        Raises:
            ReplicaStoreException: If the API call fails or the API server
                is unreachable.
        """
        try:
            await asyncio.to_thread(self._patch, replica, annotations)
        except ApiException as e:
            raise ReplicaStoreException(
                "patch", _reason(e), replica=replica.name, status=e.status
            ) from e
        except (HTTPError, OSError) as e:
            raise ReplicaStoreException("patch", str(e), replica=replica.name) from e
        logger.debug("Patched annotations on pod %s/%s", replica.namespace, replica.name)
