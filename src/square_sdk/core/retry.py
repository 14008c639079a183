"""
Square SDK Retry Policy

Decides, after each physical attempt, whether a logical call is finished or
should be attempted again, and how long to wait first.

    Attempting -> SUCCEEDED   response is 2xx, or not eligible for retry
               -> RETRYING    eligible and the retry budget allows it
               -> EXHAUSTED   eligible failure but the budget is spent,
                              or a transport failure that may not be retried

Retry ``n`` (1-based) waits ``base_interval * backoff_factor ** (n - 1)``, so
the exponent is the number of retries already made. Each wait is clamped to
what remains of ``max_total_wait``.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from square_sdk.config.value_objects import RetryConfig
from square_sdk.ports.validators import IRetryPolicy, RetryDecision

_EPSILON = 1e-9


@dataclass
class RetryState:
    """Bookkeeping for one logical call; discarded when the call ends."""

    attempts: int = 0
    retries: int = 0
    total_wait: float = 0.0
    next_delay: float = 0.0

    def begin_attempt(self) -> None:
        self.attempts += 1

    def begin_retry(self) -> float:
        """Account for the wait that precedes the next attempt."""
        self.retries += 1
        self.total_wait += self.next_delay
        return self.next_delay


def parse_retry_after(headers: dict[str, str] | None) -> float | None:
    """Seconds requested by a Retry-After header (delta-seconds or HTTP date)."""
    if not headers:
        return None
    value = next((v for k, v in headers.items() if k.lower() == "retry-after"), None)
    if value is None:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


class RetryPolicy(IRetryPolicy):
    """Retry decisions driven by RetryConfig."""

    def __init__(self, config: RetryConfig):
        """Initialize retry policy.

        Args:
            config: Retry configuration
        """
        self.config = config

    def is_retryable_method(self, method: str) -> bool:
        return method.upper() in self.config.retryable_methods

    def is_retryable_status(self, status_code: int) -> bool:
        return status_code in self.config.retryable_status_codes

    def backoff_delay(self, retry_number: int) -> float:
        """Exponential backoff: base_interval * backoff_factor^(retry_number - 1)."""
        return self.config.base_interval * (
            self.config.backoff_factor ** (retry_number - 1)
        )

    def get_retry_delay(
        self, retry_number: int, headers: dict[str, str] | None = None
    ) -> float:
        """Delay before retry ``retry_number`` (1-indexed).

        A Retry-After header longer than the computed backoff wins.
        """
        delay = self.backoff_delay(retry_number)
        retry_after = parse_retry_after(headers)
        if retry_after is not None:
            delay = max(delay, retry_after)
        return delay

    def decide(
        self,
        state: RetryState,
        method: str,
        status_code: int | None = None,
        timed_out: bool = False,
        transport_failure: bool = False,
        headers: dict[str, str] | None = None,
    ) -> RetryDecision:
        """Evaluate a completed attempt.

        Args:
            state: Retry bookkeeping of the logical call
            method: HTTP method of the call
            status_code: Response status, None when no response arrived
            timed_out: The attempt failed with a timeout
            transport_failure: The attempt failed without a response
            headers: Response headers (for Retry-After)

        Returns:
            RetryDecision; ``state.next_delay`` is set when RETRYING
        """
        if status_code is not None:
            if 200 <= status_code < 300 or not self.is_retryable_status(status_code):
                return RetryDecision.SUCCEEDED
            if not self.is_retryable_method(method):
                return RetryDecision.SUCCEEDED
        else:
            if not (timed_out or transport_failure):
                raise ValueError("decide() needs a status code or a failure flag")
            if not self.is_retryable_method(method):
                return RetryDecision.EXHAUSTED
            if timed_out and not self.config.retry_on_timeout:
                return RetryDecision.EXHAUSTED

        if state.retries >= self.config.max_retries:
            return RetryDecision.EXHAUSTED

        remaining = self.config.max_total_wait - state.total_wait
        if remaining <= _EPSILON:
            return RetryDecision.EXHAUSTED

        # the last wait is cut down to what is left of the ceiling
        state.next_delay = min(self.get_retry_delay(state.retries + 1, headers), remaining)
        return RetryDecision.RETRYING
