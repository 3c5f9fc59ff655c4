"""Stream resolution exceptions."""

from __future__ import annotations


class VixStreamError(Exception):
    """Base class for all stream resolution errors."""


class TransportError(VixStreamError):
    """Raised when an outbound request fails at the network level."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


class ExtractionError(VixStreamError):
    """Raised when the player configuration cannot be read from the page."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ScriptSyntaxError(ExtractionError):
    """Raised when the embedded script cannot be tokenized."""
