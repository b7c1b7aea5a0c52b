"""
Bounded retry with exponential backoff.

Used when refreshing the application list: a failed fetch is retried a
limited number of times, waiting longer after each consecutive failure.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

@dataclass
class RetryConfig:
    """Configuration for retrying a remote call."""
    max_attempts: int = 3
    backoff_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    max_backoff_seconds: float = 30.0

    @classmethod
    def from_sync_config(cls, sync_config) -> "RetryConfig":
        return cls(
            max_attempts=sync_config.fetch_retry_attempts,
            backoff_seconds=sync_config.backoff_seconds,
            backoff_multiplier=sync_config.backoff_multiplier,
            max_backoff_seconds=sync_config.max_backoff_seconds,
        )

class RetryPolicy:
    """Tracks consecutive failures and computes backoff delays."""

    def __init__(self, config: Optional[RetryConfig] = None):
        self.config = config or RetryConfig()
        self.consecutive_failures = 0
        self.last_failure_time = 0.0

    def get_backoff_time(self, failures: Optional[int] = None) -> float:
        """Delay to wait after the given number of consecutive failures."""
        failures = self.consecutive_failures if failures is None else failures
        if failures <= 0:
            return 0.0
        backoff = self.config.backoff_seconds * (self.config.backoff_multiplier ** (failures - 1))
        return min(backoff, self.config.max_backoff_seconds)

    def should_retry(self, failures: Optional[int] = None) -> bool:
        """Whether another attempt is allowed after the given number of failures."""
        failures = self.consecutive_failures if failures is None else failures
        return failures < self.config.max_attempts

    def record_success(self) -> None:
        """Record a successful call (resets backoff)."""
        self.consecutive_failures = 0

    def record_failure(self) -> None:
        """Record a failed call (increases backoff)."""
        self.consecutive_failures += 1
        self.last_failure_time = time.time()
        logger.warning(f"Call failed, consecutive failures: {self.consecutive_failures}")

    def get_status(self) -> Dict[str, Any]:
        return {
            "max_attempts": self.config.max_attempts,
            "consecutive_failures": self.consecutive_failures,
            "next_backoff_seconds": self.get_backoff_time(),
        }

async def retry_async(func: Callable[[], Awaitable[T]], policy: RetryPolicy,
                      sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep) -> T:
    """
    Await ``func`` until it succeeds or the policy runs out of attempts.

    The attempt count is local to this call, so concurrent calls sharing a
    policy do not affect each other. The last exception is re-raised once
    attempts are exhausted.
    """
    failures = 0
    while True:
        try:
            result = await func()
        except Exception:
            failures += 1
            policy.record_failure()
            if not policy.should_retry(failures):
                raise
            delay = policy.get_backoff_time(failures)
            logger.info(f"Retrying in {delay:.2f}s (attempt {failures + 1}/{policy.config.max_attempts})")
            await sleep(delay)
        else:
            policy.record_success()
            return result
