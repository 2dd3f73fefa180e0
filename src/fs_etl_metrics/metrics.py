"""Prometheus instruments emitted by the FS ETL demo job."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

BATCH_LABEL = "batch"
SQL_BUCKETS = (0.1, 0.5, 1, 5, 10, 100)
API_BUCKETS = (0.00001, 0.000015, 0.00002, 0.000025, 0.00003)
OPERATIONS_BUCKETS = (0.001, 0.0015, 0.002, 0.0025, 0.01)


@dataclass(slots=True)
class EtlMetrics:
    """Handles for every instrument of a single ETL process."""

    registry: CollectorRegistry
    batch: str
    completion_time: Gauge
    success_time: Gauge
    duration: Gauge
    records: Gauge
    info: Gauge
    sql_duration_vec: Histogram
    api_duration_vec: Histogram
    operations_duration_vec: Histogram
    operations_total_vec: Counter

    @property
    def txn_count(self) -> Gauge:
        return self.info.labels(self.batch)

    @property
    def sql_duration(self) -> Histogram:
        return self.sql_duration_vec.labels(self.batch)

    @property
    def api_duration(self) -> Histogram:
        return self.api_duration_vec.labels(self.batch)

    @property
    def operations_duration(self) -> Histogram:
        return self.operations_duration_vec.labels(self.batch)

    @property
    def operations_total(self) -> Counter:
        return self.operations_total_vec.labels(self.batch)


def build_metrics(registry: CollectorRegistry | None = None, *, batch: str = "eft") -> EtlMetrics:
    """Declare every instrument on ``registry``.

    The success timestamp gauge is deliberately left out of the registry; the
    batch loop attaches it to the push gatherer once a backup succeeds.
    Registering a name twice raises ``ValueError``.
    """

    registry = registry if registry is not None else CollectorRegistry()
    return EtlMetrics(
        registry=registry,
        batch=batch,
        completion_time=Gauge(
            "fs_etl_complete_timestamp_seconds",
            "The timestamp of the last completion of a FS ETL job, successful or not.",
            registry=registry,
        ),
        success_time=Gauge(
            "fs_etl_success_timestamp_seconds",
            "The timestamp of the last successful completion of a FS ETL job.",
            registry=None,
        ),
        duration=Gauge(
            "fs_etl_duration_seconds",
            "The duration of the last FS ETL job in seconds.",
            registry=registry,
        ),
        records=Gauge(
            "fs_etl_records_processed",
            "The number of records processed in the last FS ETL job.",
            registry=registry,
        ),
        info=Gauge(
            "txn_count",
            "The number of records discovered to be processed for FS ETL job",
            labelnames=(BATCH_LABEL,),
            registry=registry,
        ),
        sql_duration_vec=Histogram(
            "fs_sql_duration_seconds",
            "Duration of the FS ETL sql requests in seconds",
            labelnames=(BATCH_LABEL,),
            buckets=SQL_BUCKETS,
            registry=registry,
        ),
        api_duration_vec=Histogram(
            "fs_api_duration_seconds",
            "Duration of the FS ETL api requests in seconds",
            labelnames=(BATCH_LABEL,),
            buckets=API_BUCKETS,
            registry=registry,
        ),
        operations_duration_vec=Histogram(
            "fs_etl_operations_seconds",
            "Duration of the entire FS ETL requests in seconds",
            labelnames=(BATCH_LABEL,),
            buckets=OPERATIONS_BUCKETS,
            registry=registry,
        ),
        operations_total_vec=Counter(
            "fs_etl_operations_total",
            "The number of records processed for the FS ETL job.",
            labelnames=(BATCH_LABEL,),
            registry=registry,
        ),
    )


@dataclass(slots=True)
class Gatherers:
    """A registry plus loose collectors, serialized together on push."""

    registry: CollectorRegistry
    extra: list[Collector] = field(default_factory=list)

    def add_collector(self, collector: Collector) -> None:
        """Attach ``collector``; attaching the same one again is a no-op."""

        if not any(existing is collector for existing in self.extra):
            self.extra.append(collector)

    def collect(self) -> Iterator[Metric]:
        yield from self.registry.collect()
        for collector in self.extra:
            yield from collector.collect()

    def get_sample_value(
        self, name: str, labels: dict[str, str] | None = None
    ) -> float | None:
        """Same lookup as ``CollectorRegistry.get_sample_value`` across all members."""

        labels = labels or {}
        for metric in self.collect():
            for sample in metric.samples:
                if sample.name == name and sample.labels == labels:
                    return sample.value
        return None


__all__ = [
    "API_BUCKETS",
    "BATCH_LABEL",
    "OPERATIONS_BUCKETS",
    "SQL_BUCKETS",
    "EtlMetrics",
    "Gatherers",
    "build_metrics",
]
