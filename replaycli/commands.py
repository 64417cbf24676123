"""Subcommand handlers.

Each handler performs its gateway call(s), prints the rendered result and
returns a process exit code. Local precondition failures and remote errors
propagate as :class:`PreconditionError` / :class:`ApiError` for the CLI to
report.
"""

from __future__ import annotations

import logging
from typing import Any

from replaycli import api
from replaycli.client import ReplaydClient
from replaycli.config import Settings
from replaycli.errors import PreconditionError
from replaycli.formatting import (
    format_identity,
    format_status,
    format_status_config,
    format_storms,
    format_storms_json,
)
from replaycli.models import StartOptions, StatusOptions, StormNameOptions, StormsOptions
from replaycli.start import check_start_options, resolve_start_request

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 255


def _print_server_msg(payload: Any, fallback: str) -> None:
    msg = payload.get("msg") if isinstance(payload, dict) else None
    print(msg or fallback)


def _require_name(options: StormNameOptions, command: str) -> str:
    if not options.name:
        raise PreconditionError(f"--name is required for {command}")
    return options.name


def run_storms(client: ReplaydClient, settings: Settings, options: StormsOptions) -> int:
    storms = api.fetch_storms(client)
    if options.output == "json":
        print(format_storms_json(storms))
    else:
        print(format_storms(storms))
    return EXIT_OK


def run_start(client: ReplaydClient, settings: Settings, options: StartOptions) -> int:
    check_start_options(options)
    storms = api.fetch_storms(client)
    request = resolve_start_request(options, settings, storms)
    logger.info(
        f"Starting replay of {request.name}: adv {request.startadv}-{request.endadv} "
        f"every {request.frequency} sec"
    )
    result = api.configure_replay(client, request)
    _print_server_msg(
        result, f"Replay of {request.name} started (adv {request.startadv}-{request.endadv})."
    )
    return EXIT_OK


def run_status(client: ReplaydClient, settings: Settings, options: StatusOptions) -> int:
    if options.output == "config" and not options.name:
        raise PreconditionError("--name is required with --as config")
    result = api.fetch_status(client)
    if options.output == "json":
        print(result.raw)
    elif options.output == "config":
        print(format_status_config(result.records, options.name, settings))
    else:
        print(format_status(result.records))
    return EXIT_OK


def run_next_adv(client: ReplaydClient, settings: Settings, options: StormNameOptions) -> int:
    name = _require_name(options, "nextAdv")
    result = api.next_advisory(client, name)
    _print_server_msg(result, f"Next advisory for {name} requested.")
    return EXIT_OK


def run_delete(client: ReplaydClient, settings: Settings, options: StormNameOptions) -> int:
    name = _require_name(options, "delete")
    result = api.delete_replay(client, name)
    _print_server_msg(result, f"Replay of {name} deleted.")
    return EXIT_OK


def run_uuid(client: ReplaydClient, settings: Settings, options: Any = None) -> int:
    print(format_identity(api.fetch_identity(client)))
    return EXIT_OK
