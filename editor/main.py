from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import pendulum

from conversion.api.service import HoverService
from conversion.dates import SUPPORTED_LOCALES
from editor.client import ConversionClient, ConversionHttpClient, LocalConversionClient
from editor.message import MessageType, show_message


def timezone_name(value: str) -> str | None:
    """argparse type for ``--timezone``; ``local`` means the system zone."""
    name = value.strip()
    if not name or name.lower() == "local":
        return None
    try:
        pendulum.timezone(name)
    except (ValueError, KeyError) as exc:
        raise argparse.ArgumentTypeError(f"unknown time zone {name!r}") from exc
    return name


def build_api_client(args: argparse.Namespace) -> ConversionClient:
    if args.api == "http":
        return ConversionHttpClient(base_url=args.api_url, timeout=args.api_timeout)
    return LocalConversionClient(
        service=HoverService(locale=args.locale, timezone=args.timezone)
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Preview and convert timestamps, Unicode escapes, cron and Base64"
    )
    parser.add_argument(
        "--api",
        choices=["local", "http"],
        default="local",
        help="run the engine in-process or call a conversion API server",
    )
    parser.add_argument(
        "--api-url",
        default="http://127.0.0.1:8000",
        help="Base URL for HTTP API client",
    )
    parser.add_argument(
        "--api-timeout", type=float, default=10.0, help="HTTP API timeout in seconds"
    )
    parser.add_argument(
        "--locale",
        choices=SUPPORTED_LOCALES,
        default="zh-CN",
        help="locale for messages and long-form dates",
    )
    parser.add_argument(
        "--timezone",
        type=timezone_name,
        default=None,
        help="display time zone for local mode (default: system zone)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="enable debug logging"
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    hover = subcommands.add_parser("hover", help="show the hover preview for a token")
    hover.add_argument("word", help="word under the cursor")
    hover.add_argument("--line", default="", help="full text of the current line")

    convert = subcommands.add_parser("convert", help="rewrite a whole document")
    convert.add_argument("path", help="file to convert")
    convert.add_argument(
        "--unicode-only",
        action="store_true",
        help="only decode Unicode escapes, leave timestamps alone",
    )
    target = convert.add_mutually_exclusive_group()
    target.add_argument(
        "--in-place", action="store_true", help="overwrite the input file"
    )
    target.add_argument("--output", default=None, help="write the result to this path")
    return parser


def run_hover(client: ConversionClient, args: argparse.Namespace) -> int:
    payload = client.hover(args.word, args.line, args.locale)
    if payload.get("format") == "none":
        show_message(f"No recognised format in {args.word!r}", MessageType.WARNING)
        return 1
    print(payload.get("markdown", ""))
    return 0


def run_convert(client: ConversionClient, args: argparse.Namespace) -> int:
    source = Path(args.path)
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        show_message(f"Failed to read {source}: {exc}", MessageType.ERROR)
        return 2

    mode = "unicode" if args.unicode_only else "all"
    converted = client.convert(text, mode, args.locale)

    if args.in_place or args.output:
        target = source if args.in_place else Path(args.output)
        try:
            target.write_text(converted, encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            show_message(f"Failed to write {target}: {exc}", MessageType.ERROR)
            return 2
        show_message(f"Converted {source} -> {target}", MessageType.INFORMATIONAL)
    else:
        sys.stdout.write(converted)
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s [%(name)s] %(message)s",
        )

    client = build_api_client(args)
    try:
        if args.command == "hover":
            return run_hover(client, args)
        return run_convert(client, args)
    except RuntimeError as exc:
        show_message(str(exc), MessageType.ERROR)
        return 3


if __name__ == "__main__":
    raise SystemExit(run_cli())
