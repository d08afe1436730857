"""
Minimum-interval request throttle.
"""

from __future__ import annotations

import time
from collections.abc import Callable


class RequestThrottle:
    """
    Enforces a minimum interval between consecutive outbound requests.
    """

    def __init__(
        self,
        *,
        min_interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._min_interval_seconds = max(0.0, min_interval_seconds)
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None

    def wait(self) -> None:
        """
        Sleep as needed so the next request respects the interval.
        """

        if self._last_request is not None and self._min_interval_seconds > 0:
            elapsed = self._clock() - self._last_request
            wait_seconds = self._min_interval_seconds - elapsed
            if wait_seconds > 0:
                self._sleep(wait_seconds)
        self._last_request = self._clock()
