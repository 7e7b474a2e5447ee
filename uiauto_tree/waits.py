# uiauto_tree/waits.py
"""
@file waits.py
@brief Async polling utilities for awaiting tree changes.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Optional, TypeVar

from .config import TreeConfig
from .exceptions import TimeoutError
from .interfaces import IScheduler
from .timinglogger import TIMING_LOGGER

T = TypeVar("T")


class AsyncioScheduler(IScheduler):
    """Scheduler backed by the running event loop's clock."""

    def now(self) -> float:
        return asyncio.get_running_loop().time()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class VirtualScheduler(IScheduler):
    """
    Scheduler with a virtual clock.

    sleep() advances the clock instantly but still yields to the event loop,
    so timing behavior can be tested without wall-clock delays.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self.sleeps: list = []

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self._now += seconds
        await asyncio.sleep(0)


def _set_timeout_metadata(
    error: TimeoutError,
    *,
    description: str,
    timeout: float,
    attempt_count: int,
    elapsed: float,
    original_exception: Optional[BaseException],
) -> None:
    error.description = description
    error.timeout = timeout
    error.attempt_count = attempt_count
    error.elapsed_time = elapsed
    error.original_exception = original_exception


async def wait_for_element(
    expectation: Callable[[], T],
    timeout: Optional[float] = None,
    interval: Optional[float] = None,
    *,
    scheduler: Optional[IScheduler] = None,
    description: str = "expectation",
) -> T:
    """
    Wait until expectation() returns without raising.

    The first attempt runs immediately. Each retry re-runs the expectation
    in full; a final attempt always happens at the deadline.

    @param expectation Zero-argument callable; may return an awaitable
    @param timeout Seconds before giving up (config default when None)
    @param interval Seconds between attempts (config default when None)
    @param scheduler Clock and sleep source (event loop when None)
    @param description Text used in log events and the timeout message
    @return The expectation's return value
    @throws TimeoutError carrying the last failure when the deadline passes
    """
    config = TreeConfig.current().wait_for_element
    timeout = config.timeout if timeout is None else timeout
    interval = config.interval if interval is None else interval
    scheduler = scheduler or AsyncioScheduler()

    start_time = scheduler.now()
    attempt_count = 0

    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="wait_start",
            description=description,
            metadata={"timeout_s": timeout, "interval_s": interval},
        )

    while True:
        attempt_count += 1
        try:
            result = expectation()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            elapsed = scheduler.now() - start_time
            time_left = timeout - elapsed

            if time_left <= 0:
                if TIMING_LOGGER.is_enabled():
                    TIMING_LOGGER.log(
                        event="wait_timeout",
                        description=description,
                        status="error",
                        metadata={"attempts": attempt_count, "elapsed_s": round(elapsed, 3)},
                    )
                error = TimeoutError(
                    f"Timed out waiting for {description} after {timeout}s "
                    f"({attempt_count} attempts). "
                    f"Last error: {type(e).__name__}: {e}"
                )
                _set_timeout_metadata(
                    error,
                    description=description,
                    timeout=timeout,
                    attempt_count=attempt_count,
                    elapsed=elapsed,
                    original_exception=e,
                )
                raise error from e

            sleep_time = min(interval, time_left)
            if TIMING_LOGGER.is_enabled():
                TIMING_LOGGER.log(
                    event="wait_retry",
                    description=description,
                    metadata={"attempt": attempt_count, "sleep_s": round(sleep_time, 3)},
                )
            await scheduler.sleep(sleep_time)
            continue

        if TIMING_LOGGER.is_enabled():
            TIMING_LOGGER.log(
                event="wait_success",
                description=description,
                status="success",
                metadata={
                    "attempts": attempt_count,
                    "elapsed_s": round(scheduler.now() - start_time, 3),
                },
            )
        return result


async def flush_microtasks() -> None:
    """Yield once to the event loop so already-scheduled callbacks run."""
    await asyncio.sleep(0)
