"""Domain entities.

Pure domain models for the source objects a cached client is built from
and the controller replicas that coordinate shutdown. No Kubernetes client
types leak in here.
"""

from secrets_operator.domain.entities.client import (
    AuthConfig,
    ClientHandle,
    ConnectionConfig,
    CredentialProvider,
    ObjectIdentity,
)
from secrets_operator.domain.entities.replica import ReplicaDescriptor

__all__ = [
    "AuthConfig",
    "ClientHandle",
    "ConnectionConfig",
    "CredentialProvider",
    "ObjectIdentity",
    "ReplicaDescriptor",
]
