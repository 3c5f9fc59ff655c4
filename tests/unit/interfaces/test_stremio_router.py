"""Tests for Stremio addon router endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from vixstream.domain.entities.stream import StreamDescriptor, StreamRequest
from vixstream.interfaces.api.stremio.router import _parse_stream_id, router

_DESCRIPTOR = StreamDescriptor(
    provider_name="VixSrc",
    display_title="▶️ Auto-Select\n🎧 Multi-Audio: IT | EN",
    playlist_url="https://vixsrc.to/playlist/230432?token=a&h=1&lang=en",
    referer="https://vixsrc.to/movie/603",
)


def _make_app(*, vixsrc_stream_uc: AsyncMock | None = None) -> FastAPI:
    """Create a minimal FastAPI app with the stremio router."""
    app = FastAPI()
    app.include_router(router)
    app.state.vixsrc_stream_uc = vixsrc_stream_uc or AsyncMock()
    return app


class TestParseStreamId:
    def test_movie_with_prefix(self) -> None:
        result = _parse_stream_id("movie", "tmdb:603")
        assert result == StreamRequest(media_id="603", media_type="movie")

    def test_movie_without_prefix(self) -> None:
        result = _parse_stream_id("movie", "603")
        assert result is not None
        assert result.media_id == "603"

    def test_series_episode(self) -> None:
        result = _parse_stream_id("series", "tmdb:1396:2:5")
        assert result == StreamRequest(
            media_id="1396", media_type="episode", season=2, episode=5
        )

    def test_series_without_episode(self) -> None:
        assert _parse_stream_id("series", "tmdb:1396") is None

    def test_movie_with_episode_parts(self) -> None:
        assert _parse_stream_id("movie", "603:1:1") is None

    def test_imdb_ids_not_supported(self) -> None:
        assert _parse_stream_id("movie", "tt0133093") is None

    def test_non_numeric_season(self) -> None:
        assert _parse_stream_id("series", "1396:x:5") is None

    def test_zero_episode(self) -> None:
        assert _parse_stream_id("series", "1396:1:0") is None

    def test_invalid_content_type(self) -> None:
        assert _parse_stream_id("channel", "603") is None


class TestManifestEndpoint:
    def test_manifest(self) -> None:
        client = TestClient(_make_app())
        resp = client.get("/stremio/manifest.json")

        assert resp.status_code == 200
        data = resp.json()
        assert data["resources"] == ["stream"]
        assert data["types"] == ["movie", "series"]
        assert data["idPrefixes"] == ["tmdb:"]
        assert data["catalogs"] == []
        assert resp.headers["access-control-allow-origin"] == "*"


class TestStreamEndpoint:
    def test_movie_stream(self) -> None:
        uc = AsyncMock()
        uc.execute.return_value = [_DESCRIPTOR]
        client = TestClient(_make_app(vixsrc_stream_uc=uc))

        resp = client.get("/stremio/stream/movie/tmdb:603.json")

        assert resp.status_code == 200
        (stream,) = resp.json()["streams"]
        assert stream["name"] == "VixSrc"
        assert stream["title"] == "▶️ Auto-Select\n🎧 Multi-Audio: IT | EN"
        assert stream["url"] == _DESCRIPTOR.playlist_url
        assert stream["behaviorHints"] == {
            "proxyHeaders": {"request": {"Referer": "https://vixsrc.to/movie/603"}},
            "notWebReady": True,
        }
        uc.execute.assert_awaited_once_with(
            StreamRequest(media_id="603", media_type="movie")
        )

    def test_series_stream(self) -> None:
        uc = AsyncMock()
        uc.execute.return_value = []
        client = TestClient(_make_app(vixsrc_stream_uc=uc))

        resp = client.get("/stremio/stream/series/tmdb:1396:2:5.json")

        assert resp.json() == {"streams": []}
        uc.execute.assert_awaited_once_with(
            StreamRequest(media_id="1396", media_type="episode", season=2, episode=5)
        )

    def test_invalid_id_returns_empty(self) -> None:
        uc = AsyncMock()
        client = TestClient(_make_app(vixsrc_stream_uc=uc))

        resp = client.get("/stremio/stream/movie/tt0133093.json")

        assert resp.status_code == 200
        assert resp.json() == {"streams": []}
        uc.execute.assert_not_called()
