"""Admission control and retry primitives."""

from stellar_integration.resilience.ratelimit import RateLimiter
from stellar_integration.resilience.retry import RetryExecutor, calculate_backoff

__all__ = ["RateLimiter", "RetryExecutor", "calculate_backoff"]
