"""Best-effort audio language probe on the HLS master playlist.

Audio renditions are announced as::

    #EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="audio",NAME="Italian",LANGUAGE="it",...

Any failure falls back to the default label; the probe cannot tell
"no alternate audio" from "playlist unreachable".
"""

from __future__ import annotations

import re

import structlog

from vixstream.domain.entities.stream import (
    DEFAULT_AUDIO_LABEL,
    AudioProbe,
    default_audio_probe,
)
from vixstream.domain.exceptions import TransportError
from vixstream.infrastructure.http.fetcher import HttpFetcher

log = structlog.get_logger(__name__)

_AUDIO_MEDIA_PREFIX = "#EXT-X-MEDIA:TYPE=AUDIO"
_LANGUAGE_RE = re.compile(r'LANGUAGE="([^"]+)"')


def parse_audio_languages(manifest: str) -> tuple[str, ...]:
    """Collect upper-cased audio languages in order of first appearance."""
    languages: list[str] = []
    for line in manifest.split("\n"):
        if not line.startswith(_AUDIO_MEDIA_PREFIX):
            continue
        match = _LANGUAGE_RE.search(line)
        if not match:
            continue
        lang = match.group(1).upper()
        if lang not in languages:
            languages.append(lang)
    return tuple(languages)


def build_audio_label(languages: tuple[str, ...]) -> str:
    """``🎧 Multi-Audio: IT | EN`` or the default label when empty."""
    if not languages:
        return DEFAULT_AUDIO_LABEL
    return f"🎧 Multi-Audio: {' | '.join(languages)}"


class AudioTrackProber:
    """Fetches the master playlist to label the stream with its audio tracks."""

    def __init__(self, fetcher: HttpFetcher, *, timeout: float = 10.0) -> None:
        self._fetcher = fetcher
        self._timeout = timeout

    async def probe(self, playlist_url: str, referer: str) -> AudioProbe:
        """Never raises; failures produce a degraded default label."""
        try:
            result = await self._fetcher.fetch(
                playlist_url,
                headers={"Referer": referer},
                timeout=self._timeout,
            )
        except TransportError as exc:
            log.warning(
                "vixsrc_audio_probe_failed",
                url=playlist_url,
                reason=exc.reason,
            )
            return default_audio_probe(degraded=True)

        if not result.ok:
            log.warning(
                "vixsrc_audio_probe_http_error",
                status=result.status_code,
                url=playlist_url,
            )
            return default_audio_probe(degraded=True)

        languages = parse_audio_languages(result.text)
        log.debug("vixsrc_audio_languages", languages=languages, url=playlist_url)
        return AudioProbe(label=build_audio_label(languages), languages=languages)
