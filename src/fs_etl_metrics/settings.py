"""Application-wide configuration helpers."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Typed settings leveraging environment variables for overrides."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    gateway_url: str = Field(
        default="http://127.0.0.1:9091",
        description="Base URL of the Prometheus Pushgateway.",
    )
    job_name: str = Field(default="pushgateway", min_length=1)
    batch_label: str = Field(
        default="eft",
        min_length=1,
        description="Value of the `batch` label on labeled metrics.",
    )
    iterations: int = Field(default=40, ge=0, description="Simulated records per run.")
    sql_max_delay_ms: int = Field(default=10_000, ge=0)
    api_max_delay_ms: int = Field(default=1_000, ge=0)
    record_max_delay_ms: int = Field(default=2_000, ge=0)
    txn_count: int = Field(
        default=345234523,
        ge=0,
        description="Number of transactions the SQL stage reports as discovered.",
    )
    records_per_call: int = Field(default=42, ge=0)
    failure_probability: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Chance that a backup call reports failure; 0 never fails.",
    )
    push_timeout_seconds: float = Field(default=10.0, gt=0)
    seed: int | None = Field(default=None, description="Random seed for the delays.")

    model_config = {
        "env_file": ".env",
        "env_prefix": "FS_ETL_",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("gateway_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("gateway_url cannot be empty")
        return value


@lru_cache
def get_settings() -> Settings:
    """Cache Settings to avoid re-parsing env on every call."""

    return Settings()
