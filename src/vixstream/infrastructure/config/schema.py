"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/125.0.0.0 Safari/537.36"
)


def _validate_http_url(value: str, field_name: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"{field_name} must be an http(s) URL, got: {value!r}")
    return value


class VixSrcConfig(BaseModel):
    """Configuration for the VixSrc provider.

    All values configurable via YAML (vixsrc section) or ENV vars.
    """

    base_url: str = Field(
        default="https://vixsrc.to",
        description="Origin of the VixSrc site (landing pages and playlists).",
    )
    proxy_url: str | None = Field(
        default=None,
        description=(
            "Forwarding proxy base. When set, every request goes to "
            "<proxy_url><percent-encoded target URL>."
        ),
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="Browser User-Agent sent with the landing page request.",
    )
    playlist_lang: str = Field(
        default="en",
        description="Value of the 'lang' parameter appended to playlist URLs.",
    )
    landing_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for the landing page request (seconds).",
    )
    playlist_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for the audio-track playlist probe (seconds).",
    )
    probe_audio: bool = Field(
        default=True,
        description="Fetch the playlist to list audio languages in the title.",
    )

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        return _validate_http_url(v, "base_url").rstrip("/")

    @field_validator("proxy_url")
    @classmethod
    def _validate_proxy_url(cls, v: str | None) -> str | None:
        if not v:
            return None
        return _validate_http_url(v, "proxy_url")

    @field_validator("landing_timeout_seconds", "playlist_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (logging/vixsrc).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="vixstream", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # VixSrc provider (YAML section: vixsrc.*)
    vixsrc: VixSrcConfig = Field(default_factory=VixSrcConfig)

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - VIXSTREAM_ENVIRONMENT
    - VIXSTREAM_LOG_LEVEL
    - VIXSTREAM_VIXSRC_BASE_URL
    - VIXSRC_PROXY_URL (unprefixed, kept for existing deployments)
    """

    model_config = SettingsConfigDict(
        env_prefix="VIXSTREAM_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    vixsrc_base_url: Optional[str] = None
    vixsrc_user_agent: Optional[str] = None
    vixsrc_proxy_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("VIXSRC_PROXY_URL", "VIXSTREAM_VIXSRC_PROXY_URL"),
    )

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
