"""Tests for Stremio stream formatting."""

from __future__ import annotations

from vixstream.domain.entities.stream import StreamDescriptor
from vixstream.infrastructure.stremio.stream_formatter import (
    build_behavior_hints,
    format_stream,
    format_streams,
)


def _descriptor(**overrides: object) -> StreamDescriptor:
    fields: dict[str, object] = {
        "provider_name": "VixSrc",
        "display_title": "▶️ Auto-Select\n🎧 Multi-Audio: IT | EN",
        "playlist_url": "https://vixsrc.to/playlist/1?token=a&h=1&lang=en",
        "referer": "https://vixsrc.to/movie/603",
    }
    fields.update(overrides)
    return StreamDescriptor(**fields)  # type: ignore[arg-type]


class TestBuildBehaviorHints:
    def test_referer_and_not_web_ready(self) -> None:
        assert build_behavior_hints(_descriptor()) == {
            "proxyHeaders": {"request": {"Referer": "https://vixsrc.to/movie/603"}},
            "notWebReady": True,
        }

    def test_not_web_ready_follows_descriptor(self) -> None:
        hints = build_behavior_hints(_descriptor(not_web_ready=False))
        assert hints["notWebReady"] is False


class TestFormatStream:
    def test_fields(self) -> None:
        stream = format_stream(_descriptor())
        assert stream["name"] == "VixSrc"
        assert stream["title"] == "▶️ Auto-Select\n🎧 Multi-Audio: IT | EN"
        assert stream["url"] == "https://vixsrc.to/playlist/1?token=a&h=1&lang=en"
        assert stream["type"] == "url"
        assert stream["behaviorHints"]["proxyHeaders"]["request"]["Referer"] == (
            "https://vixsrc.to/movie/603"
        )


class TestFormatStreams:
    def test_envelope(self) -> None:
        result = format_streams([_descriptor()])
        assert len(result["streams"]) == 1

    def test_empty(self) -> None:
        assert format_streams([]) == {"streams": []}
