"""Port for providers that turn a media request into playable streams."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vixstream.domain.entities.stream import StreamDescriptor, StreamRequest


@runtime_checkable
class StreamProviderPort(Protocol):
    """Resolves a movie or episode to zero or more stream descriptors.

    Implementations own the site-specific extraction (page scraping,
    script evaluation, playlist signing, etc.) and never raise: an empty
    list means no stream was found.
    """

    @property
    def name(self) -> str:
        """Provider name shown to users (e.g. 'VixSrc')."""
        ...

    async def execute(self, request: StreamRequest) -> list[StreamDescriptor]:
        """Resolve *request*; returns an empty list on any failure."""
        ...
