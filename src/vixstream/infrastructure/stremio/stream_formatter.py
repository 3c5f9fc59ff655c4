"""Convert StreamDescriptors into Stremio ``Stream`` JSON objects.

Pure transformation logic without I/O.
"""

from __future__ import annotations

from typing import Any

from vixstream.domain.entities.stream import StreamDescriptor


def build_behavior_hints(descriptor: StreamDescriptor) -> dict[str, Any]:
    """Build Stremio ``behaviorHints`` for a playlist bound to its referer.

    ``notWebReady`` makes Stremio route the manifest through its local
    streaming server, which sends ``proxyHeaders`` with the request.
    """
    return {
        "proxyHeaders": {
            "request": {"Referer": descriptor.referer},
        },
        "notWebReady": descriptor.not_web_ready,
    }


def format_stream(descriptor: StreamDescriptor) -> dict[str, Any]:
    return {
        "name": descriptor.provider_name,
        "title": descriptor.display_title,
        "url": descriptor.playlist_url,
        "type": "url",
        "behaviorHints": build_behavior_hints(descriptor),
    }


def format_streams(descriptors: list[StreamDescriptor]) -> dict[str, Any]:
    """Wrap descriptors in the ``{"streams": [...]}`` response envelope."""
    return {"streams": [format_stream(d) for d in descriptors]}
