"""Simulated units of work standing in for SQL queries and API calls."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import dataclass

from .logging import get_logger, log_structured

LOGGER = get_logger(__name__)


class StageError(RuntimeError):
    """Raised (or returned) when a simulated stage reports failure."""


class RandomDelay:
    """Block for a random number of milliseconds in ``[0, max_ms)``.

    Args:
        max_ms: Exclusive upper bound of the delay. Zero disables sleeping.
        name: Label used in log lines, e.g. ``SQL`` or ``API``.
        rng: Random source; pass a seeded instance for reproducible runs.
        sleep: Blocking sleep taking seconds. Tests inject a no-op.
    """

    def __init__(
        self,
        max_ms: int,
        *,
        name: str = "delay",
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_ms < 0:
            raise ValueError("max_ms must be non-negative")
        self.max_ms = max_ms
        self.name = name
        self._rng = rng or random.Random()
        self._sleep = sleep

    def __call__(self) -> int:
        millis = self._rng.randrange(self.max_ms) if self.max_ms > 0 else 0
        log_structured(LOGGER, f"{self.name} sleeping", millis=millis)
        self._sleep(millis / 1000)
        return millis


@dataclass(slots=True, frozen=True)
class StageResult:
    records: int
    error: StageError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def simulate_sql_query(delay: Callable[[], int]) -> StageResult:
    """Stand in for the multi-second query that discovers pending records."""

    delay()
    return StageResult(records=0)


def perform_backup(
    delay: Callable[[], int],
    *,
    records: int = 42,
    failure_probability: float = 0.0,
    rng: random.Random | None = None,
) -> StageResult:
    """Stand in for one API call of the batch job.

    Returns the number of records handled. With ``failure_probability`` left
    at zero the error channel is never used.
    """

    delay()
    if failure_probability > 0 and (rng or random).random() < failure_probability:
        return StageResult(records=0, error=StageError("simulated backup failure"))
    return StageResult(records=records)


__all__ = [
    "RandomDelay",
    "StageError",
    "StageResult",
    "perform_backup",
    "simulate_sql_query",
]
