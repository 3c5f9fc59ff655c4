"""httpx transport that routes every request through a forwarding proxy."""

from __future__ import annotations

from urllib.parse import quote

import httpx
import structlog

log = structlog.get_logger(__name__)

# Characters JavaScript's encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def proxied_url(proxy_base: str, url: str) -> str:
    """Return ``<proxy_base><percent-encoded url>``.

    >>> proxied_url("https://proxy.example/?url=", "https://vixsrc.to/movie/1")
    'https://proxy.example/?url=https%3A%2F%2Fvixsrc.to%2Fmovie%2F1'
    """
    return f"{proxy_base}{quote(url, safe=_URI_COMPONENT_SAFE)}"


class ForwardingProxyTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx transport and rewrites each request to the proxy.

    The target URL is percent-encoded and appended to *proxy_base*.
    Method, body and caller headers are forwarded unchanged; the ``Host``
    header is recomputed for the proxy.
    """

    def __init__(self, wrapped: httpx.AsyncBaseTransport, proxy_base: str) -> None:
        self._wrapped = wrapped
        self._proxy_base = proxy_base

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        target = str(request.url)
        headers = [
            (name, value)
            for name, value in request.headers.multi_items()
            if name.lower() != "host"
        ]
        forwarded = httpx.Request(
            request.method,
            proxied_url(self._proxy_base, target),
            headers=headers,
            stream=request.stream,
            extensions=request.extensions,
        )
        # Passing stream= skips httpx's header preparation.
        forwarded.headers["Host"] = forwarded.url.netloc.decode("ascii")
        log.debug("proxy_forward", target=target)
        return await self._wrapped.handle_async_request(forwarded)

    async def aclose(self) -> None:
        """Close the wrapped transport."""
        await self._wrapped.aclose()


def build_transport(
    proxy_url: str | None,
    *,
    wrapped: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncBaseTransport:
    """Pick the transport strategy once, at startup.

    Direct transport when *proxy_url* is unset, forwarding transport
    otherwise.
    """
    inner = wrapped or httpx.AsyncHTTPTransport()
    if not proxy_url:
        return inner
    log.info("proxy_transport_enabled", proxy_base=proxy_url)
    return ForwardingProxyTransport(inner, proxy_url)
