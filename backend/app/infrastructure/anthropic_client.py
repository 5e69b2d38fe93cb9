"""Resilient Anthropic Client: Messages API calls for workout plans, with retry policy.

Invariants:
    - 429 rate limits and transient failures (5xx, 529 overloaded, connection
      drops) are retried at most max_retries times
    - Timeouts and other 4xx responses fail on the first attempt
    - Every failure leaves this module as ExternalServiceError (HTTP 502)
    - Retry-After (seconds) from a 429 wins over computed backoff

Design Decisions:
    - SDK retries disabled (max_retries=0) so a single policy applies
    - Backoff is exponential from base_delay_ms, capped at max_delay_ms,
      with +/-25% jitter
"""

import asyncio
import logging
import random
from enum import Enum

import anthropic
from anthropic import (
    APIConnectionError, APIError, APIStatusError, APITimeoutError,
    RateLimitError,
)

from app.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "AI workout generator"

_OVERLOADED_STATUS = 529


class FailureClass(str, Enum):
    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    TIMEOUT = "timeout"
    FATAL = "fatal"


def classify_failure(error: APIError) -> FailureClass:
    """Decide whether an SDK error is worth another attempt."""
    if isinstance(error, RateLimitError):
        return FailureClass.RATE_LIMITED
    # APITimeoutError subclasses APIConnectionError; check it first
    if isinstance(error, APITimeoutError):
        return FailureClass.TIMEOUT
    if isinstance(error, APIConnectionError):
        return FailureClass.TRANSIENT
    if isinstance(error, APIStatusError) and (
        error.status_code >= 500 or error.status_code == _OVERLOADED_STATUS
    ):
        return FailureClass.TRANSIENT
    return FailureClass.FATAL


def retry_after_ms(error: APIError) -> int | None:
    response = getattr(error, "response", None)
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if value and value.isdigit():
        return int(value) * 1000
    return None


class ResilientAnthropicClient:
    """AsyncAnthropic wrapper used by the plan generator."""

    def __init__(
        self,
        api_key: str,
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 30_000,
        timeout_seconds: int = 120,
    ):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key, timeout=timeout_seconds, max_retries=0,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        system: str,
        messages: list,
    ):
        attempt = 0
        while True:
            try:
                response = await self.client.messages.create(
                    model=model,
                    max_tokens=max_tokens,
                    system=system,
                    messages=messages,
                )
            except APIError as e:
                delay_ms = self._next_delay(e, attempt)
                logger.warning(
                    f"Anthropic call failed ({type(e).__name__}), "
                    f"retrying in {delay_ms}ms",
                    extra={"attempt": attempt + 1},
                )
                await asyncio.sleep(delay_ms / 1000)
                attempt += 1
                continue

            usage = response.usage
            logger.info(
                "Anthropic API success",
                extra={
                    "attempt": attempt + 1,
                    "input_tokens": usage.input_tokens,
                    "output_tokens": usage.output_tokens,
                },
            )
            return response

    def _next_delay(self, error: APIError, attempt: int) -> int:
        """Delay before the next attempt, or raise when no retry is allowed."""
        failure = classify_failure(error)
        if failure == FailureClass.TIMEOUT:
            raise ExternalServiceError(SERVICE_NAME, "request timed out") from error
        if failure == FailureClass.FATAL:
            raise ExternalServiceError(
                SERVICE_NAME, f"client error: {error}",
            ) from error
        if attempt >= self.max_retries:
            reason = (
                "rate limit exceeded" if failure == FailureClass.RATE_LIMITED
                else f"transient failure ({error})"
            )
            raise ExternalServiceError(
                SERVICE_NAME, f"{reason} after {self.max_retries} retries",
            ) from error
        if failure == FailureClass.RATE_LIMITED:
            hinted = retry_after_ms(error)
            if hinted:
                return hinted
        return self._backoff(attempt)

    def _backoff(self, attempt: int) -> int:
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311
