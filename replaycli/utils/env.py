from __future__ import annotations

import os
from pathlib import Path


def load_env_file_if_present(
    path: str | Path = ".env", prefix: str = "REPLAYD_", override: bool = False
) -> dict[str, str]:
    """Load KEY=VALUE pairs from a .env file into the process environment.

    Only keys starting with ``prefix`` are considered, so an unrelated
    project .env in the working directory does not leak into the process.
    Pass ``prefix=""`` to load everything.

    Returns the loaded key-values. Existing environment variables win unless
    ``override`` is set. Blank lines, comments and lines without ``=`` are
    skipped; surrounding quotes are stripped from values.
    """
    env_path = Path(path)
    loaded: dict[str, str] = {}
    if not env_path.is_file():
        return loaded

    for raw in env_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export ") :]
        key, value = (part.strip() for part in line.split("=", 1))
        if not key.startswith(prefix):
            continue
        value = value.strip('"').strip("'")
        if override or key not in os.environ:
            os.environ[key] = value
        loaded[key] = value
    return loaded
