"""Tests for settings parsing and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fs_etl_metrics.settings import Settings, get_settings


def test_defaults_match_demo_constants() -> None:
    settings = Settings(_env_file=None)
    assert settings.gateway_url == "http://127.0.0.1:9091"
    assert settings.job_name == "pushgateway"
    assert settings.batch_label == "eft"
    assert settings.iterations == 40
    assert settings.failure_probability == 0.0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FS_ETL_ITERATIONS", "5")
    monkeypatch.setenv("FS_ETL_GATEWAY_URL", "http://gateway:9091/")
    settings = get_settings()
    assert settings.iterations == 5
    assert settings.gateway_url == "http://gateway:9091"


@pytest.mark.parametrize(
    "overrides",
    [
        {"iterations": -1},
        {"failure_probability": 1.5},
        {"gateway_url": "  "},
        {"push_timeout_seconds": 0},
    ],
)
def test_invalid_values_are_rejected(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)
