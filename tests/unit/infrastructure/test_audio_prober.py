"""Tests for the master playlist audio probe."""

from __future__ import annotations

import httpx
import pytest
import respx

from vixstream.domain.entities.stream import DEFAULT_AUDIO_LABEL
from vixstream.infrastructure.http.fetcher import HttpFetcher
from vixstream.infrastructure.vixsrc.audio import (
    AudioTrackProber,
    build_audio_label,
    parse_audio_languages,
)

_PLAYLIST_URL = "https://vixsrc.to/playlist/230432?token=abc&h=1&lang=en"
_REFERER = "https://vixsrc.to/movie/603"


class TestParseAudioLanguages:
    def test_collects_audio_languages(self, master_playlist: str) -> None:
        assert parse_audio_languages(master_playlist) == ("IT", "EN")

    def test_ignores_subtitle_lines(self) -> None:
        manifest = '#EXT-X-MEDIA:TYPE=SUBTITLES,LANGUAGE="de"\n'
        assert parse_audio_languages(manifest) == ()

    def test_deduplicates_case_insensitively(self) -> None:
        manifest = (
            '#EXT-X-MEDIA:TYPE=AUDIO,LANGUAGE="it",NAME="Italian"\n'
            '#EXT-X-MEDIA:TYPE=AUDIO,LANGUAGE="IT",NAME="Italian AD"\n'
            '#EXT-X-MEDIA:TYPE=AUDIO,LANGUAGE="en",NAME="English"\n'
        )
        assert parse_audio_languages(manifest) == ("IT", "EN")

    def test_audio_line_without_language(self) -> None:
        manifest = '#EXT-X-MEDIA:TYPE=AUDIO,NAME="Main"\n'
        assert parse_audio_languages(manifest) == ()

    def test_prefix_must_start_the_line(self) -> None:
        manifest = ' #EXT-X-MEDIA:TYPE=AUDIO,LANGUAGE="it"\n'
        assert parse_audio_languages(manifest) == ()

    def test_empty_manifest(self) -> None:
        assert parse_audio_languages("") == ()


class TestBuildAudioLabel:
    def test_languages_joined(self) -> None:
        assert build_audio_label(("IT", "EN")) == "🎧 Multi-Audio: IT | EN"

    def test_single_language(self) -> None:
        assert build_audio_label(("IT",)) == "🎧 Multi-Audio: IT"

    def test_no_languages_gives_default(self) -> None:
        assert build_audio_label(()) == DEFAULT_AUDIO_LABEL
        assert DEFAULT_AUDIO_LABEL == "🎧 Multi-Audio & Subtitles"


class TestAudioTrackProber:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_labels_languages(self, master_playlist: str) -> None:
        route = respx.get(_PLAYLIST_URL).respond(200, text=master_playlist)

        async with httpx.AsyncClient() as client:
            probe = await AudioTrackProber(HttpFetcher(client)).probe(_PLAYLIST_URL, _REFERER)

        assert probe.label == "🎧 Multi-Audio: IT | EN"
        assert probe.languages == ("IT", "EN")
        assert probe.degraded is False
        assert route.calls.last.request.headers["Referer"] == _REFERER

    @respx.mock
    @pytest.mark.asyncio()
    async def test_playlist_without_audio_tracks(self) -> None:
        respx.get(_PLAYLIST_URL).respond(200, text="#EXTM3U\n")

        async with httpx.AsyncClient() as client:
            probe = await AudioTrackProber(HttpFetcher(client)).probe(_PLAYLIST_URL, _REFERER)

        assert probe.label == DEFAULT_AUDIO_LABEL
        assert probe.degraded is False

    @respx.mock
    @pytest.mark.asyncio()
    async def test_http_error_degrades(self) -> None:
        respx.get(_PLAYLIST_URL).respond(403, text="forbidden")

        async with httpx.AsyncClient() as client:
            probe = await AudioTrackProber(HttpFetcher(client)).probe(_PLAYLIST_URL, _REFERER)

        assert probe.label == DEFAULT_AUDIO_LABEL
        assert probe.degraded is True

    @respx.mock
    @pytest.mark.asyncio()
    async def test_connection_error_degrades(self) -> None:
        respx.get(_PLAYLIST_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with httpx.AsyncClient() as client:
            probe = await AudioTrackProber(HttpFetcher(client)).probe(_PLAYLIST_URL, _REFERER)

        assert probe.label == DEFAULT_AUDIO_LABEL
        assert probe.degraded is True

    @respx.mock
    @pytest.mark.asyncio()
    async def test_timeout_degrades(self) -> None:
        respx.get(_PLAYLIST_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        async with httpx.AsyncClient() as client:
            probe = await AudioTrackProber(HttpFetcher(client), timeout=1.0).probe(
                _PLAYLIST_URL, _REFERER
            )

        assert probe.degraded is True
