"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

os.environ.setdefault("FS_ETL_LOG_LEVEL", "DEBUG")

from fs_etl_metrics.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
