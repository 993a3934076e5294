"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from secrets_operator.domain.entities import (
    AuthConfig,
    ClientHandle,
    ConnectionConfig,
    CredentialProvider,
    ObjectIdentity,
    ReplicaDescriptor,
)
from secrets_operator.domain.enums import ErrorKind, WatchOutcome
from secrets_operator.domain.exceptions import (
    AnnotationPublishException,
    ClonedParentNotAllowedException,
    DuplicateUIDException,
    EmptyAuthMethodException,
    EmptyNamespaceException,
    IncompleteClientContextException,
    InvalidLabelSelectorException,
    InvalidUIDLengthException,
    KeyLengthExceededException,
    OperatorException,
)
from secrets_operator.domain.value_objects import ClientCacheKey

__all__ = [
    "AnnotationPublishException",
    "AuthConfig",
    "ClientCacheKey",
    "ClientHandle",
    "ClonedParentNotAllowedException",
    "ConnectionConfig",
    "CredentialProvider",
    "DuplicateUIDException",
    "EmptyAuthMethodException",
    "EmptyNamespaceException",
    "ErrorKind",
    "IncompleteClientContextException",
    "InvalidLabelSelectorException",
    "InvalidUIDLengthException",
    "KeyLengthExceededException",
    "ObjectIdentity",
    "OperatorException",
    "ReplicaDescriptor",
    "WatchOutcome",
]
