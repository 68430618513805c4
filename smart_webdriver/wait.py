"""
Polling wait for custom conditions.

Example usage:
    Wait.up_to(10).until(lambda: verify_report_stats())
    Wait.up_to(timedelta(minutes=2)).checking_every(5).until(lambda: job_finished())
"""

import logging
import time
from datetime import timedelta
from typing import Callable, Union

from .config import Timeouts
from .exceptions import WaitTimeoutError
from .test_response import TestResponse

logger = logging.getLogger(__name__)

Duration = Union[int, float, timedelta]
Condition = Callable[[], Union[bool, TestResponse]]


def as_seconds(duration: Duration) -> float:
    """Convert a timedelta or a number of seconds into seconds."""
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


def _format_elapsed(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m, {secs}s"


def _to_response(result: Union[bool, TestResponse]) -> TestResponse:
    if isinstance(result, TestResponse):
        return result
    return TestResponse(bool(result), "The condition returned false")


class Wait:
    """Repeatedly evaluate a condition until it succeeds or the timeout expires."""

    def __init__(self, timeout: Duration = 0, interval: Duration = Timeouts.POLL_INTERVAL):
        self.timeout = as_seconds(timeout)
        self.interval = as_seconds(interval)

    @classmethod
    def up_to(cls, timeout: Duration) -> "Wait":
        return cls(timeout)

    def checking_every(self, interval: Duration) -> "Wait":
        """Change the interval between evaluations of the condition."""
        self.interval = as_seconds(interval)
        return self

    def until(self, condition: Condition) -> None:
        """
        Evaluate condition until it returns True or a passing TestResponse.

        Raises:
            WaitTimeoutError: If the condition never succeeded within the timeout
        """
        response = TestResponse(False, "")
        returned_bool = True
        start = time.monotonic()

        while time.monotonic() - start < self.timeout:
            result = condition()
            returned_bool = not isinstance(result, TestResponse)
            response = _to_response(result)
            if response.pass_fail_result:
                return
            logger.debug(f"Condition not met yet, checking again in {self.interval}s")
            time.sleep(self.interval)

        if returned_bool:
            raise WaitTimeoutError(
                f"Waited {self.timeout:g} seconds for the boolean function to be true, but it was still false"
            )
        elapsed = _format_elapsed(time.monotonic() - start)
        raise WaitTimeoutError(
            f"Waited {elapsed} for the condition to be met, but it wasn't.\nError thrown: {response.messages_text}"
        )

    def while_ensuring(self, condition: Condition) -> None:
        """
        Confirm the condition keeps succeeding for the whole timeout.

        Raises:
            WaitTimeoutError: As soon as the condition fails
        """
        response = TestResponse(False, "")
        start = time.monotonic()

        while time.monotonic() - start < self.timeout:
            response = _to_response(condition())
            if not response.pass_fail_result:
                break
            time.sleep(self.interval)

        if not response.pass_fail_result:
            elapsed = _format_elapsed(time.monotonic() - start)
            raise WaitTimeoutError(
                f"I expected the condition to be met, and hold true, for {self.timeout:g} seconds, "
                f"but it failed after: {elapsed}.\nI got this error {response.messages_text}"
            )
