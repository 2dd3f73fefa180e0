"""Core package for the fs-etl-metrics demo job."""

from importlib import metadata


__all__ = ["__version__"]


try:
    __version__ = metadata.version("fs-etl-metrics")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev without install
    __version__ = "0.1.0"
