"""HTTP client for the Prometheus Pushgateway."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol

import httpx
from prometheus_client.exposition import pushadd_to_gateway

from .logging import get_logger
from .metrics import Gatherers

LOGGER = get_logger(__name__)


class PushGatewayError(RuntimeError):
    """Raised when a push does not reach the Pushgateway or is rejected."""


class PushTransport(Protocol):
    def add(self, gatherer: Gatherers) -> None:
        """Merge the gatherer's current samples into the collector."""


class PushGatewayClient:
    """Thin wrapper pushing metric snapshots with add semantics.

    ``add`` issues a ``POST`` so samples previously pushed under the same
    grouping key stay visible when a later push fails.
    """

    def __init__(
        self,
        base_url: str,
        job: str,
        *,
        grouping_key: dict[str, str] | None = None,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url
        self.job = job
        self.grouping_key = grouping_key or {}
        self.timeout_seconds = timeout_seconds
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._owns_client = client is None

    def add(self, gatherer: Gatherers) -> None:
        """Serialize ``gatherer`` in text exposition format and POST it."""

        try:
            pushadd_to_gateway(
                self.base_url,
                job=self.job,
                registry=gatherer,  # type: ignore[arg-type]
                grouping_key=self.grouping_key,
                timeout=self.timeout_seconds,
                handler=self._handler,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError comes from urllib parsing a malformed gateway URL.
            raise PushGatewayError(str(exc)) from exc

    def _handler(
        self,
        url: str,
        method: str,
        timeout: float | None,
        headers: Sequence[tuple[str, str]],
        data: bytes,
    ) -> Callable[[], None]:
        def handle() -> None:
            LOGGER.debug("Pushgateway request", extra={"url": url, "method": method})
            response = self._client.request(
                method,
                url,
                content=data,
                headers=dict(headers),
                timeout=timeout,
            )
            response.raise_for_status()

        return handle

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "PushGatewayClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["PushGatewayClient", "PushGatewayError", "PushTransport"]
