from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from vidio.infrastructure.config import AppConfig, load_config
from vidio.infrastructure.logging.setup import configure_logging
from vidio.interfaces.resolve import resolve

log = structlog.get_logger(__name__)

SESSDATA_ENV = "VIDIO_SESSDATA"


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vidio")

    # Config wiring flags (shared by all subcommands)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--mode",
        default=None,
        choices=["multi", "single"],
        help="Override playback mode.",
    )
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

    sub = parser.add_subparsers(dest="command", required=True)

    resolve_cmd = sub.add_parser("resolve", help="Resolve a video page URL.")
    resolve_cmd.add_argument("url", help="bilibili video page URL.")
    resolve_cmd.add_argument(
        "--sessdata",
        default=None,
        help=f"SESSDATA cookie value (overrides {SESSDATA_ENV} env).",
    )

    serve_cmd = sub.add_parser("serve", help="Run the HTTP API.")
    serve_cmd.add_argument(
        "--host",
        default=None,
        help="Bind host (overrides HOST env).",
    )
    serve_cmd.add_argument(
        "--port",
        default=None,
        type=int,
        help="Bind port (overrides PORT env).",
    )

    return parser.parse_args(argv)


def _load(args: argparse.Namespace) -> AppConfig:
    cli_overrides: dict[str, Any] = {}
    if args.mode:
        cli_overrides["playback_mode"] = args.mode
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    return load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )


def _resolve(args: argparse.Namespace, config: AppConfig) -> int:
    sessdata = args.sessdata
    if sessdata is None:
        sessdata = os.getenv(SESSDATA_ENV, "")

    result = asyncio.run(resolve(args.url, sessdata, config=config))
    if result.ok:
        print(result.value)
        return 0
    print(result.error, file=sys.stderr)
    return 1


def _serve(args: argparse.Namespace, config: AppConfig, log_config: dict[str, Any]) -> int:
    from vidio.interfaces.main import build_app

    host = args.host or os.getenv("HOST", "127.0.0.1")
    port = int(args.port or os.getenv("PORT", "8080"))

    uvicorn.run(
        build_app(config),
        host=host,
        port=port,
        log_config=log_config,
    )
    return 0


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, then dispatches.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    config = _load(args)
    log_config = configure_logging(config)

    if args.command == "serve":
        return _serve(args, config, log_config)
    return _resolve(args, config)


if __name__ == "__main__":
    raise SystemExit(start())
