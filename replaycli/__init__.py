"""Command-line client for the replayd storm-replay service.

This package provides:
- Request signing for the replayd API (nonce + shared secret)
- A thin signed HTTP client and one gateway function per endpoint
- Text/JSON/shell-config renderers and the ``replaycli`` CLI
"""

__version__ = "0.1.0"

__all__ = [
    "api",
    "auth",
    "cli",
    "client",
    "commands",
    "config",
    "errors",
    "formatting",
    "models",
    "start",
    "utils",
]
