"""Tests for the simulated work stages."""

from __future__ import annotations

import random

import pytest

from fs_etl_metrics.stages import (
    RandomDelay,
    StageError,
    perform_backup,
    simulate_sql_query,
)


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def test_random_delay_stays_within_bounds() -> None:
    sleep = RecordingSleep()
    delay = RandomDelay(1000, rng=random.Random(3), sleep=sleep)
    values = [delay() for _ in range(50)]
    assert all(0 <= value < 1000 for value in values)
    assert sleep.calls == [value / 1000 for value in values]


def test_random_delay_zero_never_sleeps_longer_than_zero() -> None:
    sleep = RecordingSleep()
    delay = RandomDelay(0, sleep=sleep)
    assert delay() == 0
    assert sleep.calls == [0.0]


def test_random_delay_rejects_negative_bound() -> None:
    with pytest.raises(ValueError):
        RandomDelay(-1)


def test_seeded_delays_are_reproducible() -> None:
    first = RandomDelay(10_000, rng=random.Random(7), sleep=RecordingSleep())
    second = RandomDelay(10_000, rng=random.Random(7), sleep=RecordingSleep())
    assert [first() for _ in range(5)] == [second() for _ in range(5)]


def test_perform_backup_reports_success_by_default() -> None:
    calls: list[int] = []
    result = perform_backup(lambda: calls.append(1) or 0)
    assert result.ok
    assert result.records == 42
    assert result.error is None
    assert calls == [1]


def test_perform_backup_failure_injection() -> None:
    result = perform_backup(lambda: 0, failure_probability=1.0, rng=random.Random(1))
    assert not result.ok
    assert isinstance(result.error, StageError)


def test_simulate_sql_query_blocks_once() -> None:
    calls: list[int] = []
    result = simulate_sql_query(lambda: calls.append(1) or 0)
    assert result.ok
    assert calls == [1]
