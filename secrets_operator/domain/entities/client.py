"""Client context entities.

A cached client is authenticated with an auth config, talks to the secrets
engine through a connection config, and obtains login credentials from a
credential provider. The identities of those three objects determine the
client's cache key.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ObjectIdentity:
    """Identity of a source object: its UID and current generation.

    The generation increases whenever the resource is edited, so it invalidates any
    cache key derived from the previous generation.
    """

    uid: str
    generation: int = 0


@dataclass(frozen=True)
class AuthConfig:
    """Authentication config: identity plus the auth method label (e.g. 'kubernetes')."""

    identity: ObjectIdentity
    method: str


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection config for the secrets engine."""

    identity: ObjectIdentity
    address: str = ""


class CredentialProvider(Protocol):
    """Anything that supplies login credentials and has a stable UID."""

    @property
    def uid(self) -> str:
        """UID of the object the credentials are derived from (e.g. a service account)."""
        ...


@dataclass(frozen=True)
class ClientHandle:
    """Handle of an (already constructed) cached client.

    Any part may be missing while the client is being built; a handle is
    complete only when all three parts are set and the provider has a UID.
    """

    auth: AuthConfig | None = None
    connection: ConnectionConfig | None = None
    credential_provider: CredentialProvider | None = None

    def missing_parts(self) -> list[str]:
        """Return the names of unset parts, in derivation order."""
        missing = []
        if self.auth is None:
            missing.append("auth")
        if self.connection is None:
            missing.append("connection")
        if self.credential_provider is None or not self.credential_provider.uid:
            missing.append("credential_provider")
        return missing
