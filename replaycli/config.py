"""Settings loading for replaycli.

Settings come from the ``[replayd]`` section of an INI file shared with the
rest of the ASGS tooling (``$HOME/asgs-global.conf`` by default). Credentials
may also be supplied through ``REPLAYD_APIKEY``/``REPLAYD_APISECRET`` in the
environment or a local ``.env`` file, which take precedence over the file.

The result is a read-only :class:`Settings` object loaded once at startup.
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from replaycli.auth import API_URL, load_credentials
from replaycli.errors import ConfigError
from replaycli.models import DEFAULT_FREQUENCY

logger = logging.getLogger(__name__)

SECTION = "replayd"
CONFIG_ENV = "REPLAYD_CONFIG"
CONFIG_FILENAME = "asgs-global.conf"


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    api_secret: str | None = None
    api_url: str = API_URL
    timeout: float | None = None
    frequency: int = DEFAULT_FREQUENCY
    loop: bool = False
    notify: bool = False
    email: str | None = None
    ftp_host: str = "stormreplay.com"
    ftp_host_dir: str = "/replayd/"
    rss_host: str = "stormreplay.com"
    rss_port: int = 80

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)


def default_config_path() -> Path:
    """Return the settings file path, honouring ``$REPLAYD_CONFIG``."""
    override = os.getenv(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILENAME


def _read_section(path: Path) -> configparser.SectionProxy | None:
    parser = configparser.ConfigParser(interpolation=None)
    try:
        read = parser.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not parse config file {path}: {e}") from e
    if not read:
        logger.debug(f"Config file {path} not found, using defaults")
        return None
    if not parser.has_section(SECTION):
        logger.debug(f"Config file {path} has no [{SECTION}] section")
        return None
    return parser[SECTION]


def _get(section: configparser.SectionProxy, key: str, kind: type, path: Path):
    """Typed value of ``key``; a blank value counts as unset and yields None."""
    value = (section.get(key) or "").strip()
    if not value:
        return None
    try:
        if kind is bool:
            return section.getboolean(key)
        if kind is int:
            return section.getint(key)
        if kind is float:
            return section.getfloat(key)
    except ValueError as e:
        raise ConfigError(f"Invalid value for '{key}' in {path}: {value!r}") from e
    return value


def load_settings(path: str | Path | None = None, env: bool = True) -> Settings:
    """Load settings from the INI file and the environment.

    Args:
        path: Settings file to read; defaults to :func:`default_config_path`.
        env: Whether to apply ``REPLAYD_APIKEY``/``REPLAYD_APISECRET``
            overrides (from the environment or ``.env``).

    Returns:
        A populated :class:`Settings`. A missing file yields defaults.

    Raises:
        ConfigError: If the file is malformed or a numeric/boolean key
            cannot be parsed.
    """
    config_path = Path(path).expanduser() if path else default_config_path()
    values: dict[str, object] = {}

    section = _read_section(config_path)
    if section is not None:
        keys = {
            "apikey": ("api_key", str),
            "apisecret": ("api_secret", str),
            "url": ("api_url", str),
            "timeout": ("timeout", float),
            "frequency": ("frequency", int),
            "loop": ("loop", bool),
            "notify": ("notify", bool),
            "email": ("email", str),
            "ftphost": ("ftp_host", str),
            "ftphostdir": ("ftp_host_dir", str),
            "rsshost": ("rss_host", str),
            "rssport": ("rss_port", int),
        }
        for key, (field, kind) in keys.items():
            if key in section:
                value = _get(section, key, kind, config_path)
                if value is not None:
                    values[field] = value
        logger.debug(f"Loaded {len(values)} settings from {config_path}")

    if env:
        api_key, api_secret = load_credentials()
        if api_key:
            values["api_key"] = api_key
        if api_secret:
            values["api_secret"] = api_secret

    settings = Settings(**values)
    if not settings.has_credentials:
        logger.warning(
            f"No API credentials configured (set apikey/apisecret in [{SECTION}] of {config_path})"
        )
    return settings
