"""
Main CLI entry point for law-sender.

    law-sender send [<data>] --workspace-id ID --table NAME --subscription-id ID

``<data>`` is sent as-is (no local JSON validation); ``-`` reads it from
stdin and omitting it sends ``{"name":"tester"}``.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from pydantic import ValidationError

from .. import __version__
from ..collector import new_collector
from ..core import diagnostics
from ..core.errors import LawSenderError
from ..core.settings import SendConfig, Settings

DEFAULT_DATA = '{"name":"tester"}'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="law-sender",
        description="Azure Log Analytics workspace data sender",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    commands = parser.add_subparsers(dest="command")

    send = commands.add_parser(
        "send",
        help="Send data to Azure Log Analytics workspace.",
        description=(
            "Send data to Azure Log Analytics workspace. Data should be JSON; "
            "it is passed to the service unvalidated."
        ),
    )
    send.add_argument(
        "data",
        nargs="?",
        default=DEFAULT_DATA,
        help="JSON record to send; '-' reads stdin (default: %(default)s)",
    )
    send.add_argument(
        "-w",
        "--workspace-id",
        required=True,
        help="Azure Log Analytics Workspace ID as UUID",
    )
    send.add_argument(
        "-t",
        "--table",
        required=True,
        help="Azure Log Analytics Workspace table name",
    )
    send.add_argument(
        "-s",
        "--subscription-id",
        required=True,
        help="Azure Subscription ID as UUID",
    )
    send.add_argument(
        "--timestamp",
        default=None,
        help="RFC 3339 time for the record (default: now)",
    )
    send.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Emit diagnostics as JSON lines on stderr",
    )
    return parser


def _read_data(data: str) -> bytes:
    if data == "-":
        return sys.stdin.buffer.read()
    return data.encode("utf-8")


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


def _config_from_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> SendConfig:
    try:
        return SendConfig(
            workspace_id=args.workspace_id,
            table=args.table,
            subscription_id=args.subscription_id,
            timestamp=args.timestamp,
        )
    except ValidationError as exc:
        # Exits with status 2 like any other usage error.
        parser.error(f"invalid arguments: {_describe(exc)}")
        raise


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0
    if args.verbose:
        diagnostics.enable()
    config = _config_from_args(parser, args)
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Error: invalid settings: {_describe(exc)}", file=sys.stderr)
        return 1
    try:
        collector = new_collector(config, settings=settings)
        collector.send_data(_read_data(args.data))
    except LawSenderError as e:
        diagnostics.warn("cli", "send failed", error=e.to_dict())
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cli_main() -> int:
    """Console-script entry point."""
    return main()


if __name__ == "__main__":
    sys.exit(cli_main())
