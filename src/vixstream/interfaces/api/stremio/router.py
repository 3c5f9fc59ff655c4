"""Stremio addon API endpoints (manifest, stream)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from vixstream.domain.entities.stream import StreamRequest
from vixstream.infrastructure.stremio.stream_formatter import format_streams
from vixstream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/stremio", tags=["stremio"])

_ADDON_ID = "community.vixstream"
_ADDON_VERSION = "0.1.0"

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def _build_manifest() -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    return {
        "id": _ADDON_ID,
        "version": _ADDON_VERSION,
        "name": "VixStream",
        "description": "VixSrc master playlists with audio track listing",
        "types": ["movie", "series"],
        "catalogs": [],
        "resources": ["stream"],
        "idPrefixes": ["tmdb:"],
        "behaviorHints": {
            "adult": False,
            "configurable": False,
        },
    }


def _parse_stream_id(content_type: str, raw_id: str) -> StreamRequest | None:
    """Parse a Stremio stream ID into a StreamRequest.

    Movies: "tmdb:12345" or "12345"
    Series: "tmdb:12345:1:5" or "12345:1:5" (season 1, episode 5)
    """
    if content_type not in ("movie", "series"):
        return None

    parts = raw_id.removeprefix("tmdb:").split(":")
    media_id = parts[0]
    if not media_id.isdigit():
        return None

    try:
        if content_type == "movie":
            if len(parts) != 1:
                return None
            return StreamRequest(media_id=media_id, media_type="movie")

        if len(parts) != 3:
            return None
        return StreamRequest(
            media_id=media_id,
            media_type="episode",
            season=int(parts[1]),
            episode=int(parts[2]),
        )
    except ValueError:
        return None


@router.get("/manifest.json")
async def stremio_manifest() -> JSONResponse:
    """Serve the Stremio addon manifest."""
    return JSONResponse(content=_build_manifest(), headers=_CORS_HEADERS)


@router.get("/stream/{content_type}/{stream_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Resolve the VixSrc stream for a movie or episode."""
    state = cast(AppState, request.app.state)

    parsed = _parse_stream_id(content_type, stream_id)
    if parsed is None:
        log.info("stremio_invalid_stream_id", content_type=content_type, id=stream_id)
        return JSONResponse(content={"streams": []}, headers=_CORS_HEADERS)

    descriptors = await state.vixsrc_stream_uc.execute(parsed)

    log.info(
        "stremio_stream_response",
        media_id=parsed.media_id,
        streams_returned=len(descriptors),
    )
    return JSONResponse(content=format_streams(descriptors), headers=_CORS_HEADERS)
