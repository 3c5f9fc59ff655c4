"""Read the player configuration embedded in a VixSrc landing page."""

from __future__ import annotations

from typing import Any

import structlog
from bs4 import BeautifulSoup

from vixstream.domain.entities.stream import EmbeddedConfig
from vixstream.domain.exceptions import ExtractionError, ScriptSyntaxError
from vixstream.infrastructure.vixsrc.js_sandbox import ScriptSandbox, to_js_string

log = structlog.get_logger(__name__)

# Identifies the <script> that carries the player configuration.
DATA_SCRIPT_MARKER = "window.masterPlaylist"


def find_data_script(html: str) -> str | None:
    """Return the text of the first <script> containing the marker."""
    soup = BeautifulSoup(html, "lxml")
    for script in soup.find_all("script"):
        text = script.get_text()
        if text and DATA_SCRIPT_MARKER in text:
            return text
    return None


def _playlist_params(master_playlist: Any) -> tuple[tuple[str, str], ...] | None:
    if not isinstance(master_playlist, dict):
        return None
    params = master_playlist.get("params")
    if not isinstance(params, dict):
        return None
    return tuple((str(key), to_js_string(value)) for key, value in params.items())


def _playlist_id(video: Any) -> str | None:
    if not isinstance(video, dict):
        return None
    video_id = video.get("id")
    # Mirrors a JS truthiness check: 0, "", null and false are missing.
    if video_id in (None, "", 0):
        return None
    return to_js_string(video_id)


def extract_embedded_config(
    html: str,
    *,
    sandbox: ScriptSandbox | None = None,
) -> EmbeddedConfig:
    """Locate and evaluate the data script, returning playlist parameters.

    Raises:
        ExtractionError: no data script, unreadable script, or
            ``masterPlaylist.params`` / ``video.id`` missing.
    """
    script = find_data_script(html)
    if script is None:
        raise ExtractionError("no data script")

    try:
        root = (sandbox or ScriptSandbox()).evaluate(script)
    except ScriptSyntaxError as exc:
        raise ScriptSyntaxError(f"malformed data script: {exc.reason}") from exc

    params = _playlist_params(root.get("masterPlaylist"))
    playlist_id = _playlist_id(root.get("video"))
    if params is None or playlist_id is None:
        log.debug(
            "vixsrc_script_fields",
            assigned=sorted(root),
            has_params=params is not None,
            has_video_id=playlist_id is not None,
        )
        raise ExtractionError("missing required fields")

    return EmbeddedConfig(playlist_params=params, playlist_id=playlist_id)
