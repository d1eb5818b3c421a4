"""Retry with exponential backoff and per-attempt deadlines."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from stellar_integration.errors import (
    StellarError,
    StellarNetworkError,
    StellarTimeoutError,
)
from stellar_integration.models.config import RetryPolicy

log = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


def calculate_backoff(
    attempt: int,
    initial_delay: float,
    max_delay: float,
    factor: float,
) -> float:
    """Delay before retry number ``attempt`` (zero-based), capped at max_delay."""
    return min(initial_delay * factor ** attempt, max_delay)


class RetryExecutor:
    """Runs an async operation with a deadline per attempt and backoff between.

    Errors whose ``retryable`` flag is False (timeouts, invalid addresses,
    not-found, rate limiting, parse failures) propagate on the first
    occurrence. Anything else is retried until the policy is exhausted, then
    the last error is raised.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        request_timeout_ms: int,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if policy.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {policy.max_attempts}")
        self._policy = policy
        self._timeout_s = request_timeout_ms / 1000
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def backoff(self, attempt: int) -> float:
        """Milliseconds to wait after failed attempt ``attempt``."""
        return calculate_backoff(
            attempt,
            self._policy.initial_delay_ms,
            self._policy.max_delay_ms,
            self._policy.backoff_factor,
        )

    async def run(self, operation: Callable[[], Awaitable[T]], name: str) -> T:
        max_attempts = self._policy.max_attempts
        attempt = 0

        while True:
            attempt += 1
            try:
                # wait_for cancels the in-flight call when the deadline passes
                return await asyncio.wait_for(operation(), timeout=self._timeout_s)
            except asyncio.TimeoutError:
                log.error("%s timed out after %.1fs", name, self._timeout_s)
                raise StellarTimeoutError(name) from None
            except StellarError as exc:
                if not exc.retryable:
                    raise
                error = exc
            except Exception as exc:
                error = StellarNetworkError(f"{name} failed: {exc}", exc)
                error.__cause__ = exc

            if attempt >= max_attempts:
                log.error("%s failed after %d attempts", name, max_attempts)
                raise error

            delay = self.backoff(attempt - 1)
            log.warning(
                "%s failed (attempt %d/%d): %s. Retrying in %dms",
                name, attempt, max_attempts, error, delay,
            )
            await self._sleep(delay / 1000)
