"""Client cache key derivation (UID validation, hashing, cloning).

A client cache key is ``<method>-<hash>``: the auth method stays legible for
triage while the hash absorbs the auth, connection, and credential provider
UIDs and generations into a fixed-width token, keeping the key within
Kubernetes name/label limits. Any generation bump changes the key, so a
change to the resource forces a cache miss and re-authentication.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod

from secrets_operator.core.constants import (
    CACHE_KEY_HASH_LENGTH,
    CACHE_KEY_MAX_LENGTH,
    CACHE_KEY_MAX_METHOD_LENGTH,
    CACHE_KEY_SEP,
    UID_LENGTH,
)
from secrets_operator.domain.entities import AuthConfig, ClientHandle, ConnectionConfig
from secrets_operator.domain.exceptions import (
    DuplicateUIDException,
    EmptyAuthMethodException,
    IncompleteClientContextException,
    InvalidUIDLengthException,
    KeyLengthExceededException,
)
from secrets_operator.domain.value_objects import ClientCacheKey
from secrets_operator.shared.telemetry.tracing import traced


class KeyHashAlgorithm(ABC):
    """Fixed-width digest used for the hash segment of a cache key."""

    length: int = CACHE_KEY_HASH_LENGTH

    @abstractmethod
    def hash(self, data: str) -> str:
        """Return a lowercase hex digest of exactly self.length characters."""
        ...


class TruncatedSHA256Algorithm(KeyHashAlgorithm):
    """SHA-256 hex digest truncated to the cache key hash width."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()[: self.length]


def validate_uid(uid: str) -> str:
    """Return uid unchanged if it has the required width.

    Raises:
        InvalidUIDLengthException: If len(uid) != UID_LENGTH.
    """
    if len(uid) != UID_LENGTH:
        raise InvalidUIDLengthException(uid, UID_LENGTH)
    return uid


def _check_distinct_uids(uids: list[tuple[str, str]]) -> None:
    """Raise DuplicateUIDException on the first pair of roles sharing a UID."""
    seen: dict[str, str] = {}
    for role, uid in uids:
        if uid in seen:
            raise DuplicateUIDException(uid, seen[uid], role)
        seen[uid] = role


class CacheKeyService:
    """Single source of truth for client cache key computation."""

    def __init__(self, algorithm: KeyHashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or TruncatedSHA256Algorithm()

    @staticmethod
    def canonical_input(
        auth: AuthConfig, connection: ConnectionConfig, provider_uid: str
    ) -> str:
        """Canonical hash input: ordered UIDs and generations."""
        return (
            f"{auth.identity.uid}-{auth.identity.generation}."
            f"{connection.identity.uid}-{connection.identity.generation}."
            f"{provider_uid}"
        )

    @traced("cache_key.compute")
    def compute_cache_key(
        self,
        auth: AuthConfig,
        connection: ConnectionConfig,
        provider_uid: str,
    ) -> ClientCacheKey:
        """Compute the client cache key for an auth/connection/provider triple.

        Args:
            auth: Auth config (identity and method label).
            connection: Connection config.
            provider_uid: UID of the credential provider's source object.
                Exempt from the width check, not from the uniqueness check.

        Returns:
            Root ClientCacheKey ``<method>-<hash>``.

        Raises:
            EmptyAuthMethodException: If auth.method is empty.
            InvalidUIDLengthException: If the auth or connection UID has the wrong width.
            DuplicateUIDException: If any two of the three UIDs are equal.
            KeyLengthExceededException: If the method label is too long for the key.
        """
        method = auth.method
        if not method:
            raise EmptyAuthMethodException()
        validate_uid(auth.identity.uid)
        validate_uid(connection.identity.uid)
        _check_distinct_uids(
            [
                ("auth", auth.identity.uid),
                ("connection", connection.identity.uid),
                ("credential_provider", provider_uid),
            ]
        )
        # Bound the method rather than the composed key so the failure does
        # not depend on the digest width.
        if len(method) > CACHE_KEY_MAX_METHOD_LENGTH:
            raise KeyLengthExceededException(
                method, CACHE_KEY_MAX_METHOD_LENGTH, CACHE_KEY_MAX_LENGTH
            )
        digest = self.algorithm.hash(self.canonical_input(auth, connection, provider_uid))
        return ClientCacheKey(f"{method}{CACHE_KEY_SEP}{digest}")

    def compute_cache_key_from_client(self, client: ClientHandle) -> ClientCacheKey:
        """Compute the cache key of an already constructed client.

        Raises:
            IncompleteClientContextException: If the handle lacks auth,
                connection, or credential provider context.
        """
        missing = client.missing_parts()
        if missing:
            raise IncompleteClientContextException(missing)
        # missing_parts() guarantees all three are set
        assert client.auth is not None
        assert client.connection is not None
        assert client.credential_provider is not None
        return self.compute_cache_key(
            client.auth, client.connection, client.credential_provider.uid
        )


_default_service = CacheKeyService()


def compute_client_cache_key(
    auth: AuthConfig, connection: ConnectionConfig, provider_uid: str
) -> ClientCacheKey:
    """Compute a cache key with the default (truncated SHA-256) service."""
    return _default_service.compute_cache_key(auth, connection, provider_uid)


def compute_client_cache_key_from_client(client: ClientHandle) -> ClientCacheKey:
    """Compute a client's cache key with the default service."""
    return _default_service.compute_cache_key_from_client(client)


def is_clone(key: ClientCacheKey | str) -> bool:
    """Return whether key is a namespace-scoped clone."""
    return ClientCacheKey(str(key)).is_clone()


def clone_client_cache_key(key: ClientCacheKey | str, namespace: str) -> ClientCacheKey:
    """Return the namespace-scoped clone of a root key.

    Raises:
        EmptyNamespaceException: If namespace is empty.
        ClonedParentNotAllowedException: If key is already a clone.
    """
    return ClientCacheKey(str(key)).clone(namespace)
