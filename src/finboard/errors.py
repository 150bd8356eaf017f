"""Error taxonomy shared across Finboard components."""

import json
from typing import Any


class ConfigurationWarning(UserWarning):
    """Required configuration is missing; calls will fail at use time."""


class UpstreamError(Exception):
    """A call to the Plaid API failed or returned an unusable response.

    The original exception is chained as ``__cause__`` for diagnostics. The
    message is safe to log but is never forwarded verbatim to API callers.
    """

    def __init__(
        self, operation: str, message: str, error_code: str | None = None
    ) -> None:
        self.operation = operation
        self.message = message
        self.error_code = error_code
        detail = f"{operation} failed: {message}"
        if error_code:
            detail = f"{detail} ({error_code})"
        super().__init__(detail)

    @classmethod
    def from_api_exception(cls, operation: str, exc: Any) -> "UpstreamError":
        """Build an error from a Plaid ``ApiException``, keeping its error_code.

        Args:
            operation: Name of the client operation that failed
            exc: The exception raised by the Plaid SDK

        Returns:
            UpstreamError: Error describing the failed call
        """
        error_code: str | None = None
        message = str(getattr(exc, "reason", None) or exc)

        body = getattr(exc, "body", None)
        if isinstance(body, (str, bytes)):
            try:
                details = json.loads(body)
            except ValueError:
                details = None
            if isinstance(details, dict):
                error_code = details.get("error_code")
                message = details.get("error_message") or message

        status = getattr(exc, "status", None)
        if status:
            message = f"HTTP {status}: {message}"

        return cls(operation, message, error_code)


class TransactionCountMismatchError(UpstreamError):
    """Pagination ended with a count different from the upstream total."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            "transactions_get",
            f"received {received} transactions but upstream reported {expected}",
        )


class DataUnavailable(Exception):
    """An aggregate could not be resolved and should render as a placeholder."""
