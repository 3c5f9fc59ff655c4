"""Landing page fetcher for VixSrc movies and episodes.

URLs follow the pattern:
    https://vixsrc.to/movie/{tmdb_id}
    https://vixsrc.to/tv/{tmdb_id}/{season}/{episode}

The site rejects requests without a browser User-Agent and a same-site
Referer.
"""

from __future__ import annotations

import structlog

from vixstream.domain.entities.stream import LandingPage, StreamRequest
from vixstream.infrastructure.config.schema import DEFAULT_USER_AGENT
from vixstream.infrastructure.http.fetcher import HttpFetcher

log = structlog.get_logger(__name__)


def build_landing_url(base_url: str, request: StreamRequest) -> str:
    """Return the landing page URL for a movie or an episode."""
    base = base_url.rstrip("/")
    if request.media_type == "movie":
        return f"{base}/movie/{request.media_id}"
    return f"{base}/tv/{request.media_id}/{request.season}/{request.episode}"


class LandingPageFetcher:
    """Fetches the landing page HTML; returns None on non-2xx responses.

    Transport failures propagate as :class:`TransportError`.
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        *,
        base_url: str,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout

    async def fetch(self, request: StreamRequest) -> LandingPage | None:
        url = build_landing_url(self._base_url, request)
        log.info("vixsrc_landing_fetch", url=url)

        result = await self._fetcher.fetch(
            url,
            headers={
                "Referer": f"{self._base_url}/",
                "User-Agent": self._user_agent,
            },
            timeout=self._timeout,
        )
        if not result.ok:
            log.error("vixsrc_landing_http_error", status=result.status_code, url=url)
            return None

        return LandingPage(url=url, html=result.text)
