"""Domain value objects for the secrets operator.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

from secrets_operator.core.constants import CACHE_KEY_HASH_LENGTH, CACHE_KEY_SEP
from secrets_operator.domain.exceptions import (
    ClonedParentNotAllowedException,
    EmptyNamespaceException,
)


@dataclass(frozen=True)
class ClientCacheKey:
    """Value object for a client cache key.

    Grammar: ``<method>-<hash>`` for a root key, ``<method>-<hash>-<namespace>``
    for a clone. The namespace scope may itself contain dashes or slashes
    (e.g. 'ns1/ns2'). A clone can never be the parent of another clone.
    """

    value: str

    # Locates the fixed-width hash so dashes inside the method label are not
    # read as a clone separator.
    _HASHED_KEY_RE: ClassVar[re.Pattern[str]] = re.compile(
        rf"^(?P<root>.+?{CACHE_KEY_SEP}[0-9a-f]{{{CACHE_KEY_HASH_LENGTH}}})"
        rf"(?:{CACHE_KEY_SEP}(?P<scope>.*))?$"
    )

    def __post_init__(self) -> None:
        """Validate non-empty.

        Raises:
            ValueError: If the key is empty.
        """
        if not self.value:
            raise ValueError("Client cache key must be a non-empty string")

    def __str__(self) -> str:
        return self.value

    def _split(self) -> tuple[str, str]:
        """Return (root, namespace scope); scope is '' for a root key."""
        match = self._HASHED_KEY_RE.match(self.value)
        if match:
            return match.group("root"), match.group("scope") or ""
        parts = self.value.split(CACHE_KEY_SEP, 2)
        if len(parts) > 2:
            return CACHE_KEY_SEP.join(parts[:2]), parts[2]
        return self.value, ""

    def is_clone(self) -> bool:
        """Return whether the key carries a non-empty namespace suffix.

        A trailing separator with nothing after it does not make a clone.
        """
        return self._split()[1] != ""

    def root(self) -> "ClientCacheKey":
        """Return the root key this key was cloned from (self for a root key)."""
        if not self.is_clone():
            return self
        return ClientCacheKey(self._split()[0])

    def clone(self, namespace: str) -> "ClientCacheKey":
        """Return the namespace-scoped clone of this key.

        Args:
            namespace: Namespace scope the clone is partitioned by.

        Returns:
            New key ``<this key>-<namespace>``.

        Raises:
            EmptyNamespaceException: If namespace is empty.
            ClonedParentNotAllowedException: If this key is already a clone.
        """
        if not namespace:
            raise EmptyNamespaceException()
        if self.is_clone():
            raise ClonedParentNotAllowedException(self.value)
        return ClientCacheKey(f"{self.value}{CACHE_KEY_SEP}{namespace}")
