"""Checks that the bundled dashboard only queries metrics the job emits."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

DASHBOARD = Path(__file__).resolve().parents[1] / "dashboards" / "demo_dashboard.json"
EMITTED = {
    "fs_etl_complete_timestamp_seconds",
    "fs_etl_success_timestamp_seconds",
    "fs_etl_duration_seconds",
    "fs_etl_records_processed",
    "txn_count",
    "fs_sql_duration_seconds",
    "fs_api_duration_seconds",
    "fs_etl_operations_seconds",
    "fs_etl_operations_total",
}
METRIC_PATTERN = re.compile(r"\b(?:fs|txn)_[a-z_]+")


def _expressions(dashboard: dict[str, Any]) -> list[str]:
    return [
        target["expr"]
        for panel in dashboard["panels"]
        for target in panel.get("targets", [])
        if "expr" in target
    ]


def _base_name(name: str) -> str:
    if name in EMITTED:
        return name
    return re.sub(r"_(bucket|sum|count)$", "", name)


def test_dashboard_queries_known_metrics() -> None:
    dashboard = json.loads(DASHBOARD.read_text(encoding="utf-8"))
    expressions = _expressions(dashboard)
    assert expressions

    referenced = {
        _base_name(name) for expr in expressions for name in METRIC_PATTERN.findall(expr)
    }
    assert referenced <= EMITTED
    assert referenced == EMITTED
