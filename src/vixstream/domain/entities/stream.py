"""Domain entities for VixSrc stream resolution.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

MediaType = Literal["movie", "episode"]

DEFAULT_AUDIO_LABEL = "🎧 Multi-Audio & Subtitles"


@dataclass(frozen=True)
class StreamRequest:
    """A single movie or episode to resolve.

    ``season`` and ``episode`` are set for episodes and only for episodes.
    """

    media_id: str
    media_type: MediaType
    season: int | None = None
    episode: int | None = None

    def __post_init__(self) -> None:
        if not str(self.media_id).strip():
            raise ValueError("media_id must not be empty")
        if self.media_type == "movie":
            if self.season is not None or self.episode is not None:
                raise ValueError("movie requests take no season/episode")
        elif self.media_type == "episode":
            for label, value in (("season", self.season), ("episode", self.episode)):
                if value is None or value < 1:
                    raise ValueError(f"episode requests need a positive {label}")
        else:
            raise ValueError(f"unknown media_type: {self.media_type!r}")


@dataclass(frozen=True)
class EmbeddedConfig:
    """Player configuration recovered from the landing page script."""

    playlist_params: tuple[tuple[str, str], ...]  # ordered, duplicates allowed
    playlist_id: str

    def __post_init__(self) -> None:
        if not self.playlist_id:
            raise ValueError("playlist_id must not be empty")


@dataclass(frozen=True)
class AudioProbe:
    """Outcome of the best-effort audio track probe.

    ``degraded`` is True when the probe failed and ``label`` is the
    default one.
    """

    label: str
    languages: tuple[str, ...] = ()
    degraded: bool = False


@dataclass(frozen=True)
class StreamDescriptor:
    """A resolved stream, ready to hand to a player."""

    provider_name: str  # e.g. "VixSrc"
    display_title: str  # "▶️ Auto-Select\n🎧 Multi-Audio: IT | EN"
    playlist_url: str  # HLS master playlist
    referer: str  # must be sent as Referer when fetching playlist_url
    not_web_ready: bool = True  # manifest needs client-side handling


@dataclass(frozen=True)
class LandingPage:
    """HTML of the title's landing page and the URL it was fetched from."""

    url: str
    html: str


def default_audio_probe(*, degraded: bool = False) -> AudioProbe:
    """Probe result carrying the default label (probe skipped or failed)."""
    return AudioProbe(label=DEFAULT_AUDIO_LABEL, degraded=degraded)
