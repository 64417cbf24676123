"""Exception hierarchy for replaycli.

Local precondition failures and remote call failures are kept apart so the
CLI can report them on different streams.
"""

from __future__ import annotations


class ReplaydError(RuntimeError):
    """Base class for all replaycli errors."""


class PreconditionError(ReplaydError):
    """A local check failed before (or instead of) a network call."""


class ConfigError(ReplaydError):
    """Raised when the settings file cannot be read or holds bad values."""


class ApiError(ReplaydError):
    """The remote service answered with a non-success HTTP status."""

    def __init__(self, status: int, msg: str) -> None:
        super().__init__(f"{status} {msg}")
        self.status = status
        self.msg = msg
