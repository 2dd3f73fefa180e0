"""Console logging for the ETL demo, one line per event."""

import logging
from typing import Any

from .settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(
    level: str | None = None, extra_handlers: list[logging.Handler] | None = None
) -> None:
    """Install the console handler once and (re)apply the log level.

    ``level`` defaults to ``Settings.log_level``; the CLI passes the resolved
    value after applying its overrides.
    """

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level or get_settings().log_level)

    for handler in extra_handlers or []:
        if handler not in root.handlers:
            root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)


def log_structured(logger: logging.Logger, message: str, **context: Any) -> None:
    """Log ``message`` followed by ``key=value`` pairs at INFO."""

    extras = " ".join(f"{key}={value}" for key, value in context.items())
    logger.info("%s %s", message, extras)
