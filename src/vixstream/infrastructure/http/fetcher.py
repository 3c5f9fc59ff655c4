"""Single-attempt GET helper shared by the VixSrc pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from vixstream.domain.exceptions import TransportError
from vixstream.infrastructure.config.schema import VixSrcConfig
from vixstream.infrastructure.http.proxy_transport import build_transport

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Body and status of a completed request (any status code)."""

    url: str
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpFetcher:
    """Issues one GET per call with caller-supplied headers.

    Non-2xx responses are returned as-is (``ok`` is False); connection
    errors and timeouts raise :class:`TransportError`. No retries.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def fetch(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> FetchResult:
        extra: dict[str, float] = {}
        if timeout is not None:
            extra["timeout"] = timeout
        try:
            resp = await self._http.get(
                url,
                headers=headers or {},
                follow_redirects=True,
                **extra,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(url, "timeout") from exc
        except httpx.HTTPError as exc:
            raise TransportError(url, type(exc).__name__) from exc

        return FetchResult(url=url, status_code=resp.status_code, text=resp.text)


def create_http_client(config: VixSrcConfig) -> httpx.AsyncClient:
    """Build the shared client with the configured proxy strategy."""
    return httpx.AsyncClient(
        transport=build_transport(config.proxy_url),
        follow_redirects=True,
        timeout=config.landing_timeout_seconds,
    )
