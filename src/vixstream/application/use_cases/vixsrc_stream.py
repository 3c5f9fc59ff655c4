"""VixSrc stream resolution use case.

TMDB ID -> landing page -> embedded config -> signed playlist URL
-> audio probe -> single StreamDescriptor.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from vixstream.domain.entities.stream import (
    AudioProbe,
    EmbeddedConfig,
    LandingPage,
    StreamDescriptor,
    StreamRequest,
    default_audio_probe,
)
from vixstream.domain.exceptions import VixStreamError

log = structlog.get_logger(__name__)

PROVIDER_NAME = "VixSrc"
AUTO_SELECT_LABEL = "▶️ Auto-Select"

# ---------------------------------------------------------------------------
# Collaborator protocols.
# Infrastructure components satisfy these via structural subtyping.
# ---------------------------------------------------------------------------


class _LandingFetcher(Protocol):
    async def fetch(self, request: StreamRequest) -> LandingPage | None: ...


class _ConfigExtractor(Protocol):
    """Reads the embedded player config; raises ExtractionError."""

    def __call__(self, html: str) -> EmbeddedConfig: ...


class _PlaylistUrlBuilder(Protocol):
    def __call__(
        self, base_url: str, config: EmbeddedConfig, *, lang: str = ...
    ) -> str: ...


class _AudioProber(Protocol):
    async def probe(self, playlist_url: str, referer: str) -> AudioProbe: ...


def assemble_descriptor(
    playlist_url: str,
    referer: str,
    audio_label: str,
) -> StreamDescriptor:
    """Compose the single stream entry returned for a resolved title."""
    return StreamDescriptor(
        provider_name=PROVIDER_NAME,
        display_title=f"{AUTO_SELECT_LABEL}\n{audio_label}",
        playlist_url=playlist_url,
        referer=referer,
        not_web_ready=True,
    )


class VixSrcStreamUseCase:
    """Resolve a movie or episode into a VixSrc master playlist stream.

    Flow:
        1. Fetch the landing page (non-2xx -> no streams).
        2. Read the embedded player config from the page.
        3. Build the signed playlist URL.
        4. Probe the playlist for audio languages (best effort).
        5. Assemble one descriptor.

    Any failure in steps 1-3 yields an empty list. Step 4 only degrades
    the title. Nothing raises out of :meth:`execute`.
    """

    def __init__(
        self,
        *,
        landing_fetcher: _LandingFetcher,
        config_extractor: _ConfigExtractor,
        playlist_url_builder: _PlaylistUrlBuilder,
        audio_prober: _AudioProber,
        base_url: str,
        playlist_lang: str = "en",
        probe_audio: bool = True,
    ) -> None:
        self._landing = landing_fetcher
        self._extract = config_extractor
        self._build_playlist_url = playlist_url_builder
        self._prober = audio_prober
        self._base_url = base_url.rstrip("/")
        self._lang = playlist_lang
        self._probe_audio = probe_audio

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    async def execute(self, request: StreamRequest) -> list[StreamDescriptor]:
        log.info(
            "vixsrc_stream_request",
            media_id=request.media_id,
            media_type=request.media_type,
            season=request.season,
            episode=request.episode,
        )
        try:
            return await self._resolve(request)
        except VixStreamError as exc:
            log.warning(
                "vixsrc_stream_failed",
                media_id=request.media_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return []
        except Exception:
            log.exception("vixsrc_stream_unexpected_error", media_id=request.media_id)
            return []

    async def _resolve(self, request: StreamRequest) -> list[StreamDescriptor]:
        landing = await self._landing.fetch(request)
        if landing is None:
            return []

        config = self._extract(landing.html)
        playlist_url = self._build_playlist_url(self._base_url, config, lang=self._lang)
        log.info(
            "vixsrc_playlist_built",
            playlist_id=config.playlist_id,
            url=playlist_url,
        )

        if self._probe_audio:
            audio = await self._prober.probe(playlist_url, landing.url)
        else:
            audio = default_audio_probe()

        descriptor = assemble_descriptor(playlist_url, landing.url, audio.label)
        log.info(
            "vixsrc_stream_resolved",
            media_id=request.media_id,
            languages=audio.languages,
            audio_degraded=audio.degraded,
        )
        return [descriptor]
