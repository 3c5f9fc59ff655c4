"""Shared test fixtures for the VixStream test suite."""

from __future__ import annotations

import pytest

from vixstream.domain.entities.stream import EmbeddedConfig, StreamRequest

BASE_URL = "https://vixsrc.to"

# ---------------------------------------------------------------------------
# Upstream page / manifest samples
# ---------------------------------------------------------------------------

DATA_SCRIPT = """
        window.video = {"id":"230432","name":"Some Movie","filename":"Some.Movie.2024.mkv","size":2411,"quality":1080,"duration":7011,"views":0,"is_viewable":1,"status":"public","fps":24,"legacy":0,"folder_id":"9f8e","created_at_diff":"1 year ago"};
        window.streams = [{"name":"Server1","active":false,"url":"https:\\/\\/vixsrc.to\\/playlist\\/230432?b=1&ub=1"}];
        const url = new URL("https://vixsrc.to/playlist/230432?b=1&ub=1");
        window.masterPlaylist = {
            params: {
                'token': 'c2e1b7a4d5',
                'expires': '1735686000',
                'asn': '',
            },
            url: url.toString(),
        }
        window.canPlayFHD = true
"""

LANDING_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>VixSrc</title>
  <script src="/js/app.js"></script>
  <script>window.dataLayer = window.dataLayer || [];</script>
</head>
<body>
  <div id="app"></div>
  <script>{DATA_SCRIPT}</script>
</body>
</html>
"""

MASTER_PLAYLIST = """#EXTM3U
#EXT-X-INDEPENDENT-SEGMENTS
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="audio",DEFAULT=YES,AUTOSELECT=YES,NAME="Italian",LANGUAGE="it",URI="https://vixsrc.to/playlist/230432?type=audio&rendition=ita"
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="audio",DEFAULT=NO,AUTOSELECT=YES,NAME="English",LANGUAGE="en",URI="https://vixsrc.to/playlist/230432?type=audio&rendition=eng"
#EXT-X-MEDIA:TYPE=SUBTITLES,GROUP-ID="subs",NAME="Italian",LANGUAGE="it",URI="https://vixsrc.to/playlist/230432?type=subtitle&rendition=ita"
#EXT-X-STREAM-INF:BANDWIDTH=4500000,RESOLUTION=1920x1080,AUDIO="audio",SUBTITLES="subs"
https://vixsrc.to/playlist/230432?type=video&rendition=1080p
"""

EXPECTED_PLAYLIST_URL = (
    f"{BASE_URL}/playlist/230432?token=c2e1b7a4d5&expires=1735686000&asn=&h=1&lang=en"
)


@pytest.fixture()
def movie_request() -> StreamRequest:
    return StreamRequest(media_id="603", media_type="movie")


@pytest.fixture()
def episode_request() -> StreamRequest:
    return StreamRequest(media_id="1396", media_type="episode", season=2, episode=5)


@pytest.fixture()
def embedded_config() -> EmbeddedConfig:
    return EmbeddedConfig(
        playlist_params=(("token", "abc"), ("expires", "123")),
        playlist_id="230432",
    )


@pytest.fixture()
def data_script() -> str:
    return DATA_SCRIPT


@pytest.fixture()
def landing_html() -> str:
    return LANDING_HTML


@pytest.fixture()
def master_playlist() -> str:
    return MASTER_PLAYLIST


@pytest.fixture()
def expected_playlist_url() -> str:
    return EXPECTED_PLAYLIST_URL
