"""Command-line entry point: ``replaycli <subcommand> [flags]``."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from typing import Any

import requests

from replaycli import commands
from replaycli.client import ReplaydClient
from replaycli.config import Settings, load_settings
from replaycli.errors import ApiError, ConfigError, PreconditionError
from replaycli.formatting import format_api_error
from replaycli.models import StartOptions, StatusOptions, StormNameOptions, StormsOptions

logger = logging.getLogger(__name__)

Handler = Callable[[ReplaydClient, Settings, Any], int]


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with the CLI's failure code."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(commands.EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="replaycli",
        description="Control storm replays on the replayd service (stormreplay.com)",
    )
    parser.add_argument(
        "--config",
        dest="config",
        default=None,
        help="Settings file (defaults to $REPLAYD_CONFIG or $HOME/asgs-global.conf)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log requests and decisions to stderr"
    )
    sub = parser.add_subparsers(dest="command", metavar="<subcommand>")

    storms = sub.add_parser("storms", help="List storms available for replay")
    storms.add_argument("--as", dest="output", choices=["json"], default="text")

    start = sub.add_parser("start", help="Start a replay")
    start.add_argument("--name", help="Storm name (see 'storms')")
    start.add_argument("--startadv", type=int, help="First advisory (defaults to storm minimum)")
    start.add_argument("--endadv", type=int, help="Last advisory (defaults to storm maximum)")
    start.add_argument(
        "--frequency", type=_positive_int, help="Seconds between advisories (default 21600)"
    )
    start.add_argument(
        "--loop", action=argparse.BooleanOptionalAction, default=None, help="Restart when done"
    )
    start.add_argument(
        "--notify",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Email a notice on each advisory",
    )
    start.add_argument("--email", help="Notification address")

    status = sub.add_parser("status", help="Show running replays")
    status.add_argument("--as", dest="output", choices=["json", "config"], default="text")
    status.add_argument("--name", help="Storm name (required with --as config)")

    next_adv = sub.add_parser("nextAdv", help="Issue the next advisory now")
    next_adv.add_argument("--name", help="Storm name")

    delete = sub.add_parser("delete", help="Delete a running replay")
    delete.add_argument("--name", help="Storm name")

    sub.add_parser("uuid", help="Show the identity of the API key")
    sub.add_parser("help", help="Show this help")
    return parser


def _options_for(args: argparse.Namespace) -> tuple[Handler, Any]:
    if args.command == "storms":
        return commands.run_storms, StormsOptions(output=args.output)
    if args.command == "start":
        return commands.run_start, StartOptions(
            name=args.name,
            startadv=args.startadv,
            endadv=args.endadv,
            frequency=args.frequency,
            loop=args.loop,
            notify=args.notify,
            email=args.email,
        )
    if args.command == "status":
        return commands.run_status, StatusOptions(output=args.output, name=args.name)
    if args.command == "nextAdv":
        return commands.run_next_adv, StormNameOptions(name=args.name)
    if args.command == "delete":
        return commands.run_delete, StormNameOptions(name=args.name)
    if args.command == "uuid":
        return commands.run_uuid, None
    raise PreconditionError(f"Unknown subcommand: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command in (None, "help"):
        parser.print_help()
        return commands.EXIT_OK

    try:
        handler, options = _options_for(args)
        settings = load_settings(args.config)
        client = ReplaydClient.from_settings(settings)
        return handler(client, settings, options)
    except (PreconditionError, ConfigError) as e:
        print(str(e), file=sys.stderr)
        return commands.EXIT_FAILURE
    except ApiError as e:
        print(format_api_error(e.status, e.msg))
        return commands.EXIT_FAILURE
    except requests.RequestException as e:
        logger.debug("Request failed", exc_info=True)
        print(f"Request to replayd failed: {e}", file=sys.stderr)
        return commands.EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
