"""
Unit Tests for RetryPolicy and retry_async
"""

import asyncio

import pytest

from src.config.settings import SyncConfig
from src.errors import TransientRemoteFailure
from src.utils import RetryConfig, RetryPolicy, retry_async


def test_backoff_grows_and_is_capped():
    policy = RetryPolicy(RetryConfig(backoff_seconds=1.0, backoff_multiplier=3.0, max_backoff_seconds=5.0))
    assert policy.get_backoff_time(0) == 0.0
    assert policy.get_backoff_time(1) == 1.0
    assert policy.get_backoff_time(2) == 3.0
    assert policy.get_backoff_time(3) == 5.0


def test_should_retry_until_max_attempts():
    policy = RetryPolicy(RetryConfig(max_attempts=2))
    assert policy.should_retry()
    policy.record_failure()
    assert policy.should_retry()
    policy.record_failure()
    assert not policy.should_retry()
    assert policy.get_status()["consecutive_failures"] == 2

    policy.record_success()
    assert policy.consecutive_failures == 0


def test_from_sync_config():
    config = RetryConfig.from_sync_config(SyncConfig(fetch_retry_attempts=5, backoff_seconds=0.1))
    assert config.max_attempts == 5
    assert config.backoff_seconds == 0.1


@pytest.mark.asyncio
async def test_retry_async_returns_first_success():
    attempts = []
    delays = []

    async def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise TransientRemoteFailure("boom")
        return "ok"

    async def sleep(delay):
        delays.append(delay)

    policy = RetryPolicy(RetryConfig(max_attempts=4, backoff_seconds=0.5))
    assert await retry_async(flaky, policy, sleep=sleep) == "ok"
    assert len(attempts) == 3
    assert delays == [0.5, 1.0]
    assert policy.consecutive_failures == 0


@pytest.mark.asyncio
async def test_retry_async_reraises_last_error():
    attempts = []

    async def always_fails():
        attempts.append(1)
        raise TransientRemoteFailure(f"failure {len(attempts)}")

    async def sleep(delay):
        pass

    with pytest.raises(TransientRemoteFailure, match="failure 3"):
        await retry_async(always_fails, RetryPolicy(RetryConfig(max_attempts=3)), sleep=sleep)
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_concurrent_calls_sharing_a_policy_get_full_attempts():
    attempts = {"a": 0, "b": 0}

    def failing(name):
        async def call():
            attempts[name] += 1
            raise TransientRemoteFailure(name)
        return call

    async def sleep(delay):
        await asyncio.sleep(0)

    policy = RetryPolicy(RetryConfig(max_attempts=3))
    results = await asyncio.gather(
        retry_async(failing("a"), policy, sleep=sleep),
        retry_async(failing("b"), policy, sleep=sleep),
        return_exceptions=True,
    )

    assert all(isinstance(r, TransientRemoteFailure) for r in results)
    assert attempts == {"a": 3, "b": 3}
