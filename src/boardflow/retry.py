"""Bounded, fixed-delay retry for remote calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from boardflow.contracts.config import RetryPolicy
from boardflow.contracts.exceptions import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
Sleeper = Callable[[float], Awaitable[None]]


class RetryExecutor:
    """Runs a unit of work up to ``policy.max_attempts`` times.

    Every ``Exception`` is treated the same way: logged, then retried after
    ``policy.delay_seconds`` while attempts remain. Attempts never overlap.
    When the budget is spent a :class:`RetryExhaustedError` carrying the
    operation label and the last failure is raised.
    """

    def __init__(self, *, sleep: Sleeper = asyncio.sleep) -> None:
        self._sleep = sleep

    async def execute(self, operation: Operation[T], policy: RetryPolicy | None = None) -> T:
        policy = policy or RetryPolicy()
        last_error: Exception | None = None

        for attempt in range(1, policy.max_attempts + 1):
            try:
                result = await operation()
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "%s failed on attempt %d/%d: %s", policy.operation, attempt, policy.max_attempts, exc
                )
                if attempt < policy.max_attempts:
                    logger.info("Retrying in %.1fs...", policy.delay_seconds)
                    await self._sleep(policy.delay_seconds)
                continue

            if attempt > 1:
                logger.info("%s succeeded on attempt %d", policy.operation, attempt)
            return result

        assert last_error is not None
        raise RetryExhaustedError(
            policy.operation, attempts=policy.max_attempts, last_error=last_error
        ) from last_error


async def with_retry(
    operation: Operation[T],
    policy: RetryPolicy | None = None,
    *,
    executor: RetryExecutor | None = None,
) -> T:
    """Shortcut for ``RetryExecutor().execute(operation, policy)``."""
    return await (executor or RetryExecutor()).execute(operation, policy)
