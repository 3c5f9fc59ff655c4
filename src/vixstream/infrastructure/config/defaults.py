"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "vixstream",
    "environment": "dev",
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "vixsrc": {
        "base_url": "https://vixsrc.to",
        "proxy_url": None,
        "playlist_lang": "en",
        "landing_timeout_seconds": 15.0,
        "playlist_timeout_seconds": 10.0,
        "probe_audio": True,
    },
}
