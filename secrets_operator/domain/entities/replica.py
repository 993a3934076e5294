"""Controller replica descriptor.

One descriptor per running controller pod. The orchestration platform owns
the pod; this package only reads its labels and merges into its
annotations, which act as the cross-replica coordination channel.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReplicaDescriptor:
    """Name, namespace, labels, and annotations of one controller replica."""

    name: str
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    def has_annotation(self, key: str, value: str) -> bool:
        """Return True if annotation key is present with exactly value."""
        return self.annotations.get(key) == value
