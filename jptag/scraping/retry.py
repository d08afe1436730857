"""
Bounded retry with exponential backoff for per-tag lookups.

Every exception listed in `RetryPolicy.retry_on` is retried the same way,
whether the failure is transient or structural, unless
`fail_fast_on_structural` is switched on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from jptag.config.models import RetrySettings
from jptag.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryExhaustedError(Exception):
    """Raised when every attempt for one tag has failed.

    Attributes:
        tag_id: The tag being looked up.
        attempts: Total number of attempts made (initial + retries).
        last_error: The exception from the final attempt.
        history: Exceptions from every failed attempt, oldest first.
    """

    def __init__(
        self,
        tag_id: str,
        attempts: int,
        last_error: Exception,
        history: list[Exception],
    ) -> None:
        self.tag_id = tag_id
        self.attempts = attempts
        self.last_error = last_error
        self.history = history
        super().__init__(
            f"Lookup for tag {tag_id} failed after {attempts} attempt(s). "
            f"Last error: {last_error}"
        )


@dataclass(frozen=True)
class RetryPolicy:
    """
    How often and how patiently one tag lookup is repeated.
    """

    max_retries: int = 3
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    fail_fast_on_structural: bool = False
    retry_on: tuple[type[Exception], ...] = (Exception,)

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryPolicy":
        return cls(
            max_retries=settings.max_retries,
            backoff_initial_seconds=settings.backoff_initial_seconds,
            backoff_multiplier=settings.backoff_multiplier,
            fail_fast_on_structural=settings.fail_fast_on_structural,
        )

    @property
    def total_attempts(self) -> int:
        return 1 + max(0, self.max_retries)

    def backoff_seconds(self, attempt: int) -> float:
        """
        Delay after the failed `attempt` (1-based).
        """

        return self.backoff_initial_seconds * (self.backoff_multiplier ** (attempt - 1))


def call_with_retry(
    func: Callable[[], T],
    *,
    tag_id: str,
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
    log: logging.Logger | None = None,
) -> tuple[T, int]:
    """Call `func` until it succeeds or the policy gives up.

    Returns:
        The result of the successful call and the attempt number it took.

    Raises:
        RetryExhaustedError: If every allowed attempt failed.
        Exception: Anything not covered by `policy.retry_on`, unchanged.
    """
    active_logger = log or logger
    history: list[Exception] = []
    total_attempts = policy.total_attempts

    for attempt in range(1, total_attempts + 1):
        try:
            return func(), attempt
        except policy.retry_on as exc:
            history.append(exc)
            if policy.fail_fast_on_structural and getattr(exc, "structural", False):
                raise RetryExhaustedError(tag_id, attempt, exc, history) from exc
            if attempt >= total_attempts:
                raise RetryExhaustedError(tag_id, attempt, exc, history) from exc

            delay = policy.backoff_seconds(attempt)
            log_event(
                active_logger,
                logging.WARNING,
                "tag_attempt_failed",
                tag_id=tag_id,
                attempt=attempt,
                total_attempts=total_attempts,
                retry_in_seconds=delay,
                error=str(exc),
            )
            if delay > 0:
                sleep(delay)

    raise RuntimeError(f"No lookup attempts were made for tag {tag_id}")
