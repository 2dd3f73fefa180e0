"""CLI running the simulated FS ETL batch and pushing its metrics."""

from __future__ import annotations

import argparse
import random

from .batch import BatchRunner
from .logging import configure_logging, get_logger
from .metrics import build_metrics
from .pushgateway import PushGatewayClient, PushTransport
from .settings import Settings, get_settings
from .stages import RandomDelay

LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--gateway-url",
        type=str,
        default=None,
        help="Override the Pushgateway base URL (default: FS_ETL_GATEWAY_URL or http://127.0.0.1:9091).",
    )
    parser.add_argument(
        "--job",
        type=str,
        default=None,
        help="Override the job name used as grouping key.",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Number of simulated records to process.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible delays.",
    )
    return parser


def resolve_settings(args: argparse.Namespace, settings: Settings | None = None) -> Settings:
    """Apply CLI overrides on top of environment-driven settings."""

    settings = settings or get_settings()
    overrides = {
        "gateway_url": args.gateway_url,
        "job_name": args.job,
        "iterations": args.iterations,
        "seed": args.seed,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    if not update:
        return settings
    # model_copy skips validation, so round-trip through the model instead.
    return Settings.model_validate({**settings.model_dump(), **update})


def build_runner(settings: Settings, pusher: PushTransport) -> BatchRunner:
    rng = random.Random(settings.seed)
    return BatchRunner(
        build_metrics(batch=settings.batch_label),
        pusher,
        settings,
        sql_delay=RandomDelay(settings.sql_max_delay_ms, name="SQL", rng=rng),
        api_delay=RandomDelay(settings.api_max_delay_ms, name="API", rng=rng),
        record_delay=RandomDelay(settings.record_max_delay_ms, name="Req", rng=rng),
        rng=rng,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(settings.log_level)
    LOGGER.info(
        "Starting FS ETL demo",
        extra={"gateway": settings.gateway_url, "iterations": settings.iterations},
    )

    pusher = PushGatewayClient(
        settings.gateway_url,
        settings.job_name,
        timeout_seconds=settings.push_timeout_seconds,
    )
    try:
        report = build_runner(settings, pusher).run()
        LOGGER.info(
            "Run complete: %s iterations, %s/%s pushes failed",
            report.iterations,
            report.push_failures,
            report.push_attempts,
        )
    finally:
        pusher.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
