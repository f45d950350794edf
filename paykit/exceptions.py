"""Exception hierarchy for Paykit.

Two kinds of failure matter to callers:

- ``UnimplementedError``: scaffold placeholder, never raised in steady state.
- ``TransportError``: any failure coming from the storage network or the client
  talking to it. Most user-facing failures bubble up through this type.

Usage:
    from paykit.exceptions import TransportError

    try:
        payments = await get_payment_list(reader, payee)
    except TransportError as e:
        logger.error("payment_list_failed", error=str(e), context=e.context)
"""

from __future__ import annotations

from typing import Any


class PaykitError(Exception):
    """Base exception for all Paykit errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging (dict)
        original_error: Original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize exception with rich context.

        Args:
            message: Human-readable error description
            context: Additional structured data for debugging
            original_error: Original exception if this wraps another error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        if self.original_error:
            base = f"{base} [caused by: {type(self.original_error).__name__}]"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class UnimplementedError(PaykitError):
    """Placeholder for logic not implemented in the current scaffold."""

    def __init__(self, label: str, **kwargs: Any) -> None:
        self.label = label
        super().__init__(f"{label} is not implemented yet", **kwargs)


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(PaykitError):
    """Wrapper for transport layer failures.

    Encapsulates lower-level SDK and network errors. The facade operations
    prefix ``message`` with their own name so the call chain stays traceable.
    """

    def __str__(self) -> str:
        return f"transport error: {super().__str__()}"


class StorageRequestError(TransportError):
    """Raised when the storage network answers a request with a failing status.

    Args:
        status_code: HTTP status returned by the homeserver
        url: Requested URL (truncated)
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = dict(kwargs.get("context") or {})
        if status_code:
            context["status_code"] = status_code
        if url:
            context["url"] = url[:100]  # Truncate long URLs
        kwargs["context"] = context
        self.status_code = status_code
        super().__init__(message, **kwargs)


# =============================================================================
# Utility Functions
# =============================================================================


def wrap_exception(
    error: Exception,
    message: str,
    *,
    exception_class: type[PaykitError] = TransportError,
    **context: Any,
) -> PaykitError:
    """Wrap an external exception in the Paykit exception hierarchy.

    Converts third-party exceptions (httpx, decoding errors, etc.) into
    Paykit exceptions while preserving the original error.

    Example:
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise wrap_exception(e, f"fetch endpoint: {e}", url=url) from e
    """
    return exception_class(
        message,
        context=context,
        original_error=error,
    )


__all__ = [
    "PaykitError",
    "UnimplementedError",
    "TransportError",
    "StorageRequestError",
    "wrap_exception",
]
