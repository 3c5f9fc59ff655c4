"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from vixstream.application.use_cases.vixsrc_stream import VixSrcStreamUseCase
from vixstream.infrastructure.config.schema import VixSrcConfig
from vixstream.infrastructure.http.fetcher import HttpFetcher, create_http_client
from vixstream.infrastructure.vixsrc.audio import AudioTrackProber
from vixstream.infrastructure.vixsrc.landing import LandingPageFetcher
from vixstream.infrastructure.vixsrc.playlist import build_playlist_url
from vixstream.infrastructure.vixsrc.script_config import extract_embedded_config
from vixstream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_vixsrc_use_case(
    config: VixSrcConfig,
    http_client: httpx.AsyncClient,
) -> VixSrcStreamUseCase:
    """Wire the VixSrc pipeline around a shared HTTP client."""
    fetcher = HttpFetcher(http_client)
    return VixSrcStreamUseCase(
        landing_fetcher=LandingPageFetcher(
            fetcher,
            base_url=config.base_url,
            user_agent=config.user_agent,
            timeout=config.landing_timeout_seconds,
        ),
        config_extractor=extract_embedded_config,
        playlist_url_builder=build_playlist_url,
        audio_prober=AudioTrackProber(
            fetcher,
            timeout=config.playlist_timeout_seconds,
        ),
        base_url=config.base_url,
        playlist_lang=config.playlist_lang,
        probe_audio=config.probe_audio,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create shared resources on startup, release them on shutdown."""
    state = cast(AppState, app.state)
    config = state.config.vixsrc

    state.http_client = create_http_client(config)
    state.vixsrc_stream_uc = build_vixsrc_use_case(config, state.http_client)
    log.info(
        "app_started",
        base_url=config.base_url,
        proxied=config.proxy_url is not None,
        probe_audio=config.probe_audio,
    )
    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("app_stopped")
