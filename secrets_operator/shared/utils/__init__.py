"""Shared utilities: label selectors."""

from secrets_operator.shared.utils.selectors import (
    parse_label_selector,
    selector_matches,
)

__all__ = [
    "parse_label_selector",
    "selector_matches",
]
