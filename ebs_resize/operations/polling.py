"""
EBS Resize - Poll Engine

Generic poll-until-condition loop used by every stage that waits on
eventually-consistent remote state.

The probe is called once immediately, then every `interval` seconds,
until it reports success or the time since the FIRST attempt exceeds
the timeout. Sleep and clock are injectable so tests can run without
real delays.
"""

import asyncio
import inspect
import time
from typing import Any, Awaitable, Callable, NamedTuple, Union

from ebs_resize.core.exceptions import PollTimeoutError
from ebs_resize.utils.logger import get_logger

DEFAULT_POLL_INTERVAL = 5


class PollResult(NamedTuple):
    """What a probe reports: whether the condition holds, and the value observed."""
    success: bool
    result: Any = None


Probe = Callable[[], Union[PollResult, Awaitable[PollResult]]]


async def poll_until(operation: Probe, description: str, timeout: float,
                     interval: float = DEFAULT_POLL_INTERVAL,
                     sleep=asyncio.sleep, clock=time.monotonic, logger=None):
    """
    Call `operation` until it reports success or `timeout` seconds pass.

    Args:
        operation: Zero-argument probe returning PollResult (sync or async).
            Must be a pure read of remote state.
        description: What is being waited for (used in logs and errors)
        timeout: Seconds allowed, measured from the first attempt
        interval: Seconds between attempts
        sleep: Coroutine function used to wait between attempts
        clock: Function returning the current time in seconds
        logger: Optional logger

    Returns:
        The `result` of the first successful attempt, unchanged

    Raises:
        PollTimeoutError: If the condition did not hold in time.
            Errors raised by the probe propagate as-is.

    Example:
        async def volume_available():
            volume = (await adapter.describe_volumes(['vol-1']))[0]
            return PollResult(volume.state == 'available', volume)

        volume = await poll_until(volume_available, 'vol-1 to be available', 60)
    """
    logger = logger or get_logger()
    start_time = clock()
    attempt = 0

    while True:
        attempt += 1
        outcome = operation()
        if inspect.isawaitable(outcome):
            outcome = await outcome

        elapsed = clock() - start_time

        if outcome.success:
            logger.debug(f"Done waiting for {description} after {elapsed:.1f}s ({attempt} attempts)")
            return outcome.result

        if elapsed > timeout:
            raise PollTimeoutError(description, elapsed, timeout)

        logger.debug(f"Still waiting for {description} ({elapsed:.0f}s/{timeout}s)")
        await sleep(interval)
