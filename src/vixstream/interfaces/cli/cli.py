from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from vixstream.domain.entities.stream import StreamDescriptor, StreamRequest
from vixstream.infrastructure.config import AppConfig, load_config
from vixstream.infrastructure.http.fetcher import create_http_client
from vixstream.infrastructure.logging.setup import configure_logging
from vixstream.infrastructure.stremio.stream_formatter import format_streams
from vixstream.interfaces.app import create_app
from vixstream.interfaces.composition import build_vixsrc_use_case

log = structlog.get_logger(__name__)


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    # Config wiring flags (no business logic)
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vixstream")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the Stremio addon server.")
    serve.add_argument("--host", default=None, help="Bind host (overrides HOST env).")
    serve.add_argument(
        "--port", default=None, type=int, help="Bind port (overrides PORT env)."
    )
    _add_config_flags(serve)

    resolve = sub.add_parser("resolve", help="Resolve one title and print JSON.")
    resolve.add_argument("media_type", choices=["movie", "episode"])
    resolve.add_argument("media_id", help="TMDB ID.")
    resolve.add_argument("--season", type=int, default=None)
    resolve.add_argument("--episode", type=int, default=None)
    _add_config_flags(resolve)

    args = parser.parse_args(argv)
    if args.command == "resolve":
        try:
            args.request = StreamRequest(
                media_id=args.media_id,
                media_type=args.media_type,
                season=args.season,
                episode=args.episode,
            )
        except ValueError as exc:
            parser.error(str(exc))
    return args


def _load(args: argparse.Namespace) -> AppConfig:
    cli_overrides: dict[str, Any] = {}
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    return load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )


async def resolve_once(
    config: AppConfig, request: StreamRequest
) -> list[StreamDescriptor]:
    """Run the pipeline once with a short-lived HTTP client."""
    async with create_http_client(config.vixsrc) as client:
        use_case = build_vixsrc_use_case(config.vixsrc, client)
        return await use_case.execute(request)


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, then either serves the addon or resolves
    a single title.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    config = _load(args)
    log_config = configure_logging(config)

    if args.command == "resolve":
        descriptors = asyncio.run(resolve_once(config, args.request))
        print(json.dumps(format_streams(descriptors), ensure_ascii=False, indent=2))
        return 0 if descriptors else 1

    host = args.host or os.getenv("HOST", "0.0.0.0")  # noqa: S104
    port = int(args.port or os.getenv("PORT", "7000"))
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_config=log_config,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
