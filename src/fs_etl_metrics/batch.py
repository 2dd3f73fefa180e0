"""Sequential batch loop driving the simulated ETL stages."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import dataclass

from .logging import get_logger, log_structured
from .metrics import BATCH_LABEL, EtlMetrics, Gatherers
from .pushgateway import PushGatewayError, PushTransport
from .settings import Settings
from .stages import perform_backup, simulate_sql_query

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class BatchReport:
    iterations: int = 0
    successes: int = 0
    failures: int = 0
    push_attempts: int = 0
    push_failures: int = 0


class BatchRunner:
    """Runs the SQL stage once, then ``settings.iterations`` backup calls.

    Every iteration ends with a push and one more push follows the loop, so a
    run of N iterations issues N + 1 pushes no matter how many of them fail.
    """

    def __init__(
        self,
        metrics: EtlMetrics,
        pusher: PushTransport,
        settings: Settings,
        *,
        sql_delay: Callable[[], int],
        api_delay: Callable[[], int],
        record_delay: Callable[[], int],
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.perf_counter,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self.metrics = metrics
        self.pusher = pusher
        self.settings = settings
        self.gatherer = Gatherers(metrics.registry)
        self._sql_delay = sql_delay
        self._api_delay = api_delay
        self._record_delay = record_delay
        self._rng = rng
        self._clock = clock
        self._wall_clock = wall_clock

    def run(self) -> BatchReport:
        report = BatchReport()
        self._run_sql_stage()

        for _ in range(self.settings.iterations):
            self._run_iteration(report)
            self._push(report)

        self._push(report)
        log_structured(
            LOGGER,
            "batch finished",
            iterations=report.iterations,
            processed=self.gatherer.get_sample_value(
                "fs_etl_operations_total", {BATCH_LABEL: self.metrics.batch}
            ),
            failures=report.failures,
            push_failures=report.push_failures,
        )
        return report

    def _run_sql_stage(self) -> None:
        start = self._clock()
        simulate_sql_query(self._sql_delay)
        self.metrics.sql_duration.observe(self._elapsed(start))
        self.metrics.txn_count.set(self.settings.txn_count)

    def _run_iteration(self, report: BatchReport) -> None:
        start = self._clock()
        result = perform_backup(
            self._api_delay,
            records=self.settings.records_per_call,
            failure_probability=self.settings.failure_probability,
            rng=self._rng,
        )
        self.metrics.records.set(result.records)

        elapsed = self._elapsed(start)
        self.metrics.api_duration.observe(elapsed)
        self.metrics.duration.set(elapsed)

        now = self._wall_clock()
        self.metrics.completion_time.set(now)
        if result.ok:
            self.metrics.success_time.set(now)
            self.gatherer.add_collector(self.metrics.success_time)
            report.successes += 1
        else:
            LOGGER.warning("DB backup failed: %s", result.error)
            report.failures += 1

        self._record_delay()
        self.metrics.operations_total.inc()
        self.metrics.operations_duration.observe(self._elapsed(start))
        report.iterations += 1

    def _push(self, report: BatchReport) -> None:
        report.push_attempts += 1
        try:
            self.pusher.add(self.gatherer)
        except PushGatewayError as exc:
            report.push_failures += 1
            LOGGER.warning("Could not push to Pushgateway: %s", exc)

    def _elapsed(self, start: float) -> float:
        # Observations stay non-negative even with a non-monotonic clock.
        return max(self._clock() - start, 0.0)


__all__ = ["BatchReport", "BatchRunner"]
