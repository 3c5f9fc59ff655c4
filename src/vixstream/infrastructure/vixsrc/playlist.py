"""Signed master playlist URL construction."""

from __future__ import annotations

from urllib.parse import quote_plus, urlencode

from vixstream.domain.entities.stream import EmbeddedConfig


def build_playlist_url(base_url: str, config: EmbeddedConfig, *, lang: str = "en") -> str:
    """Build ``<base>/playlist/<id>?<params>&h=1&lang=<lang>``.

    The token parameters keep their order and duplicates; ``h`` and
    ``lang`` are always appended, even if the page already set them.

    >>> cfg = EmbeddedConfig(playlist_params=(("a", "1"), ("b", "2")), playlist_id="42")
    >>> build_playlist_url("https://vixsrc.to", cfg)
    'https://vixsrc.to/playlist/42?a=1&b=2&h=1&lang=en'
    """
    params = [*config.playlist_params, ("h", "1"), ("lang", lang)]
    query = urlencode(params, quote_via=quote_plus, safe="*")
    return f"{base_url.rstrip('/')}/playlist/{config.playlist_id}?{query}"
