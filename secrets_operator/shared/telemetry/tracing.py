"""Span helpers for coordination and cache-key operations.

Spans carry only identifiers (pod names, selectors, namespaces, key
methods). Client objects and credential material are never recorded.
"""

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from secrets_operator.domain.exceptions import OperatorException

_TRACER_NAME = "secrets_operator"

# Keyword arguments copied onto spans as arg.<name>.
_RECORDED_KWARGS = frozenset({
    "namespace", "method", "label_selector", "timeout_seconds", "provider_uid",
})


def _record_failure(span: trace.Span, exc: Exception) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)
    if isinstance(exc, OperatorException) and exc.error_code:
        span.set_attribute("operator.error_code", exc.error_code)


def _record_kwargs(span: trace.Span, kwargs: dict[str, Any]) -> None:
    for key, value in kwargs.items():
        if key in _RECORDED_KWARGS:
            span.set_attribute(f"arg.{key}", str(value))


def traced(operation_name: str | None = None) -> Callable:
    """Run the decorated function (sync or async) inside a span.

    Failures set the span status to ERROR and are re-raised; operator
    exceptions also tag the span with their error code.

    Args:
        operation_name: Span name (defaults to module.qualname).
    """

    def decorator(func: Callable) -> Callable:
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"

        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                tracer = trace.get_tracer(_TRACER_NAME)
                with tracer.start_as_current_span(
                    span_name, record_exception=False, set_status_on_exception=False
                ) as span:
                    _record_kwargs(span, kwargs)
                    try:
                        return await func(*args, **kwargs)
                    except Exception as e:
                        _record_failure(span, e)
                        raise

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = trace.get_tracer(_TRACER_NAME)
            with tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                _record_kwargs(span, kwargs)
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)
