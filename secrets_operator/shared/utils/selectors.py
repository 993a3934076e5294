"""Equality-based Kubernetes label selectors.

Only the subset the controller uses is supported: comma-separated
``key=value`` or ``key==value`` requirements. Set-based expressions
(``in``, ``notin``, ``!=``, bare existence) are rejected rather than
silently matching everything.
"""

import re

from secrets_operator.domain.exceptions import InvalidLabelSelectorException

# Label key: optional DNS prefix + '/' + name; value: empty or name-like.
_LABEL_KEY_RE = re.compile(
    r"^([a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*/)?"
    r"[A-Za-z0-9]([-A-Za-z0-9_.]{0,61}[A-Za-z0-9])?$"
)
_LABEL_VALUE_RE = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]{0,61}[A-Za-z0-9])?)?$")


def parse_label_selector(selector: str) -> dict[str, str]:
    """Parse an equality selector into a dict of required labels.

    Args:
        selector: Expression such as 'control-plane=controller-manager'.

    Returns:
        Mapping of label key to required value.

    Raises:
        InvalidLabelSelectorException: If the expression is empty or malformed.
    """
    if not selector or not selector.strip():
        raise InvalidLabelSelectorException(selector, "selector is empty")
    requirements: dict[str, str] = {}
    for raw in selector.split(","):
        term = raw.strip()
        if "!=" in term:
            raise InvalidLabelSelectorException(selector, f"unsupported operator in {term!r}")
        key, sep, value = term.partition("==") if "==" in term else term.partition("=")
        key, value = key.strip(), value.strip()
        if not sep:
            raise InvalidLabelSelectorException(selector, f"missing '=' in {term!r}")
        if not _LABEL_KEY_RE.match(key):
            raise InvalidLabelSelectorException(selector, f"invalid label key {key!r}")
        if not _LABEL_VALUE_RE.match(value):
            raise InvalidLabelSelectorException(selector, f"invalid label value {value!r}")
        if key in requirements and requirements[key] != value:
            raise InvalidLabelSelectorException(selector, f"conflicting values for {key!r}")
        requirements[key] = value
    return requirements


def selector_matches(requirements: dict[str, str], labels: dict[str, str] | None) -> bool:
    """Return True if labels satisfy every requirement of a parsed selector."""
    labels = labels or {}
    return all(labels.get(key) == value for key, value in requirements.items())
