"""Domain exceptions for the secrets operator.

Cache key derivation and clone errors are non-retryable: they signal a
malformed source object, a configuration mistake, or a caller bug, and
always block the cache lookup. The presentation layer maps them to HTTP
responses in exception handlers.
"""

from typing import Any

from secrets_operator.domain.enums import ErrorKind


class OperatorException(Exception):
    """Base exception for all operator errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code (an ErrorKind value when set).
        details: Additional error context (e.g. uid, role, replica).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    @property
    def kind(self) -> ErrorKind | None:
        """Return the ErrorKind for error_code, or None for ad-hoc codes."""
        try:
            return ErrorKind(self.error_code)
        except ValueError:
            return None

    def is_kind(self, kind: ErrorKind) -> bool:
        """Return True if this error is of the given kind."""
        return self.kind is kind

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidUIDLengthException(OperatorException):
    """Raised when an object UID does not have the required fixed width."""

    def __init__(self, uid: str, expected_length: int) -> None:
        """Initialize with the offending UID.

        Args:
            uid: The UID that failed validation.
            expected_length: Required UID length.
        """
        super().__init__(
            f"invalid UID length {len(uid)} for {uid!r}, expected {expected_length}",
            ErrorKind.INVALID_UID_LENGTH.value,
            {"uid": uid, "length": len(uid), "expected_length": expected_length},
        )


class DuplicateUIDException(OperatorException):
    """Raised when two of the participating object UIDs are equal."""

    def __init__(self, uid: str, first_role: str, second_role: str) -> None:
        """Initialize with the colliding UID and the two roles it was used for.

        Args:
            uid: The duplicated UID.
            first_role: Role of the first object (e.g. 'auth').
            second_role: Role of the second object (e.g. 'connection').
        """
        super().__init__(
            f"duplicate UID {uid!r} used for {first_role} and {second_role}",
            ErrorKind.DUPLICATE_UID.value,
            {"uid": uid, "roles": [first_role, second_role]},
        )


class KeyLengthExceededException(OperatorException):
    """Raised when the auth method label would push the cache key past its maximum length."""

    def __init__(self, method: str, max_method_length: int, max_key_length: int) -> None:
        super().__init__(
            f"cache key length exceeded: method {method!r} is longer than "
            f"{max_method_length} characters (max key length {max_key_length})",
            ErrorKind.KEY_LENGTH_EXCEEDED.value,
            {
                "method": method,
                "max_method_length": max_method_length,
                "max_key_length": max_key_length,
            },
        )


class EmptyAuthMethodException(OperatorException):
    """Raised when the auth config has no method label."""

    def __init__(self) -> None:
        super().__init__("auth method is empty", ErrorKind.EMPTY_AUTH_METHOD.value)


class IncompleteClientContextException(OperatorException):
    """Raised when a client handle lacks auth, connection, or credential provider context."""

    def __init__(self, missing: list[str]) -> None:
        """Initialize with the names of the missing parts.

        Args:
            missing: Parts not set on the handle (e.g. ['auth', 'credential_provider']).
        """
        super().__init__(
            f"client context is incomplete, missing: {', '.join(missing)}",
            ErrorKind.INCOMPLETE_CLIENT_CONTEXT.value,
            {"missing": missing},
        )


class EmptyNamespaceException(OperatorException):
    """Raised when a cache key clone is requested with an empty namespace."""

    def __init__(self) -> None:
        super().__init__("namespace cannot be empty", ErrorKind.EMPTY_NAMESPACE.value)


class ClonedParentNotAllowedException(OperatorException):
    """Raised when cloning from a key that is already a clone."""

    def __init__(self, key: str) -> None:
        super().__init__(
            "parent key cannot be a clone",
            ErrorKind.CLONED_PARENT_NOT_ALLOWED.value,
            {"key": key},
        )


class InvalidLabelSelectorException(OperatorException):
    """Raised when a label selector expression cannot be parsed."""

    def __init__(self, selector: str, reason: str) -> None:
        super().__init__(
            f"invalid label selector {selector!r}: {reason}",
            ErrorKind.INVALID_LABEL_SELECTOR.value,
            {"selector": selector, "reason": reason},
        )


class AnnotationPublishException(OperatorException):
    """Raised when annotating one or more controller replicas failed.

    The message joins every failure message; details['failures'] maps
    replica name to its failure message so operators can tell which
    replica was not annotated.
    """

    def __init__(self, failures: dict[str, str], message: str | None = None) -> None:
        """Initialize with per-replica failures.

        Args:
            failures: Mapping of replica name to error message.
            message: Optional message; defaults to the joined failure messages.
        """
        super().__init__(
            message or ",".join(failures.values()),
            ErrorKind.ANNOTATION_PUBLISH_FAILED.value,
            {"failures": dict(failures)},
        )

    @property
    def failures(self) -> dict[str, str]:
        return self.details["failures"]
