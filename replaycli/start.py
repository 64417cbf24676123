"""Resolve ``start`` flags into a validated :class:`StartRequest`."""

from __future__ import annotations

import logging

from replaycli.config import Settings
from replaycli.errors import PreconditionError
from replaycli.models import StartOptions, StartRequest, StormDescriptor

logger = logging.getLogger(__name__)


def unsupported_storm(name: str | None) -> PreconditionError:
    return PreconditionError(f"{name or '(unspecified)'} is not a supported storm!")


def check_start_options(options: StartOptions) -> None:
    """Checks that need no storm lookup, run before any network call.

    Clamping can only raise ``startadv`` and lower ``endadv``, so an explicit
    inverted range can never become valid.
    """
    if not options.name:
        raise unsupported_storm(options.name)
    _check_range(options.startadv, options.endadv)


def _check_range(startadv: int | None, endadv: int | None) -> None:
    if startadv is not None and endadv is not None and startadv > endadv:
        raise PreconditionError(f"startadv ({startadv}) must not be greater than endadv ({endadv})!")


def resolve_start_request(
    options: StartOptions,
    settings: Settings,
    storms: dict[str, StormDescriptor],
) -> StartRequest:
    """Merge flags over settings and clamp advisories to the storm's bounds.

    Raises:
        PreconditionError: Unknown/missing storm, or ``startadv > endadv``
            after clamping.
    """
    descriptor = storms.get(options.name) if options.name else None
    if descriptor is None:
        raise unsupported_storm(options.name)

    startadv = options.startadv
    if startadv is None or startadv < descriptor.minstartadv:
        startadv = descriptor.minstartadv
    endadv = options.endadv
    if endadv is None or endadv > descriptor.maxendadv:
        endadv = descriptor.maxendadv
    _check_range(startadv, endadv)

    if (startadv, endadv) != (options.startadv, options.endadv):
        logger.info(f"Advisory range for {descriptor.name} resolved to {startadv}-{endadv}")

    return StartRequest(
        name=descriptor.name,
        startadv=startadv,
        endadv=endadv,
        frequency=options.frequency if options.frequency is not None else settings.frequency,
        loop=options.loop if options.loop is not None else settings.loop,
        notify=options.notify if options.notify is not None else settings.notify,
        email=options.email if options.email is not None else settings.email,
    )
