from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import uvicorn
from dotenv import load_dotenv

from ..dates import SUPPORTED_LOCALES, normalize_locale
from .config_loader import load_config
from .server import create_app
from .service import HoverService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Flags for the conversion server; each one beats the JSON file and environment."""
    parser = argparse.ArgumentParser(
        description="Serve hover previews and document conversion over HTTP",
        epilog="Settings are read from the --config JSON file, then PREVIEW_CONVERSION_* "
               "environment variables, then the flags below.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/server.json",
        help="JSON settings file; skipped when it does not exist",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="interface to bind",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="TCP port to listen on",
    )
    parser.add_argument(
        "--locale",
        choices=SUPPORTED_LOCALES,
        default=None,
        help="language for hover messages and long-form dates",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="root logging level, e.g. DEBUG or WARNING",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=getattr(logging, str(args.log_level).upper(), logging.INFO),
            format="%(levelname)s [%(name)s] %(message)s",
        )

    try:
        cfg = load_config(args.config if Path(args.config).exists() else None)
    except Exception as exc:
        logger.error("Failed to load configuration %s: %s", args.config, exc)
        sys.exit(1)

    if args.host:
        cfg.server.host = args.host
    if args.port:
        cfg.server.port = args.port
    if args.locale:
        cfg.display.locale = normalize_locale(args.locale)

    logger.info("Server configuration: %s:%d", cfg.server.host, cfg.server.port)
    logger.info(
        "Display locale=%s timezone=%s",
        cfg.display.locale,
        cfg.display.timezone or "local",
    )

    service = HoverService(locale=cfg.display.locale, timezone=cfg.display.timezone)
    app = create_app(service=service)
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port, log_level="info")


if __name__ == "__main__":
    main()
