"""Retry and error handling abstractions.

Separates error classification and retry decisions from HTTP client logic.
"""

from enum import Enum
from typing import Protocol

from square_sdk.ports.http import HttpResponse


class RetryDecision(str, Enum):
    """Outcome of evaluating one physical attempt."""

    SUCCEEDED = "succeeded"  # final: hand the response on
    RETRYING = "retrying"  # wait, then attempt again
    EXHAUSTED = "exhausted"  # final: surface the failure


class IErrorMapper(Protocol):
    """Abstraction for error classification and mapping.

    Single Responsibility: Map a non-2xx response to a domain exception.
    """

    def map_error(self, response: HttpResponse) -> Exception:
        """Map HTTP error response to domain exception.

        Args:
            response: Final response of a failed call

        Returns:
            Domain-specific exception (e.g., RateLimitError, NotFoundError)
        """
        ...


class IRetryPolicy(Protocol):
    """Abstraction for retry decision and delay calculation."""

    def decide(
        self,
        state,
        method: str,
        status_code: int | None = None,
        timed_out: bool = False,
        transport_failure: bool = False,
        headers: dict[str, str] | None = None,
    ) -> RetryDecision:
        """Evaluate a completed attempt.

        Sets ``state.next_delay`` when the decision is RETRYING.
        """
        ...
