from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

log = logging.getLogger("redirector.retry")

T = TypeVar("T")


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Result of a bounded retry loop.

    ``succeeded`` is also true when the last error was classified as benign;
    in that case ``benign`` is set and ``error`` holds the benign error.
    """

    succeeded: bool
    attempts: int
    value: T | None = None
    error: Exception | None = None
    benign: bool = False


def retry_call(
    fn: Callable[[], T],
    *,
    retries: int,
    label: str,
    delay: float = 0.0,
    is_benign: Callable[[Exception], bool] | None = None,
) -> RetryOutcome[T]:
    """Call ``fn`` once plus up to ``retries`` more times.

    Never raises for errors coming from ``fn`` and never exits; callers decide
    what an exhausted outcome means. ``delay`` adds a linear backoff between
    attempts (0 means retry immediately).
    """
    attempts = 0
    for attempt in range(1, retries + 2):
        attempts = attempt
        try:
            value = fn()
        except Exception as exc:
            if is_benign is not None and is_benign(exc):
                return RetryOutcome(succeeded=True, attempts=attempt, error=exc, benign=True)

            remaining = retries + 1 - attempt
            if remaining == 0:
                log.error("Could not %s: %s (no tries left)", label, exc)
                return RetryOutcome(succeeded=False, attempts=attempt, error=exc)

            log.warning("Could not %s: %s (remaining tries: %d)", label, exc, remaining)
            if delay > 0:
                time.sleep(delay * attempt)
            continue

        return RetryOutcome(succeeded=True, attempts=attempt, value=value)

    # retries < 0: nothing was attempted
    return RetryOutcome(succeeded=False, attempts=attempts)
