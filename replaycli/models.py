"""Typed records exchanged with the replay service and per-command options."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

DEFAULT_FREQUENCY = 21600

OutputMode = Literal["text", "json", "config"]


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True)
class StormDescriptor:
    name: str
    year: int
    minstartadv: int
    maxendadv: int

    @classmethod
    def from_payload(cls, name: str, data: dict[str, Any]) -> StormDescriptor:
        return cls(
            name=name,
            year=int(data["year"]),
            minstartadv=int(data["minstartadv"]),
            maxendadv=int(data["maxendadv"]),
        )

    def to_payload(self) -> dict[str, Any]:
        return {"year": self.year, "minstartadv": self.minstartadv, "maxendadv": self.maxendadv}


@dataclass(frozen=True)
class StormStatusRecord:
    """One running (or stopped) replay as reported by ``GET /status``.

    The raw payload nests each storm's fields under a ``config`` section
    (what was requested) and a ``status`` section (where the replay is now).
    """

    name: str
    state: str
    current_adv: int
    frequency: int
    loop: bool
    notify: bool
    email: str | None = None
    year: int | None = None
    storm_number: int | None = None
    startadv: int | None = None
    endadv: int | None = None
    coldstartdate: str | None = None
    hindcastlength: float | None = None
    hash: str | None = None

    @classmethod
    def from_payload(cls, name: str, data: dict[str, Any]) -> StormStatusRecord:
        config = data.get("config") or {}
        status = data.get("status") or {}
        notify = _as_bool(config.get("notify", False))

        def _opt_int(key: str) -> int | None:
            value = config.get(key)
            return None if value is None else int(value)

        hindcast = config.get("hindcastlength")
        return cls(
            name=name,
            state=str(status.get("state", "unknown")),
            current_adv=int(status.get("currentadv", 0)),
            frequency=int(config.get("frequency", DEFAULT_FREQUENCY)),
            loop=_as_bool(config.get("loop", False)),
            notify=notify,
            email=config.get("email") if notify else None,
            year=_opt_int("year"),
            storm_number=_opt_int("stormnumber"),
            startadv=_opt_int("startadv"),
            endadv=_opt_int("endadv"),
            coldstartdate=None if config.get("coldstartdate") is None else str(config["coldstartdate"]),
            hindcastlength=None if hindcast is None else float(hindcast),
            hash=config.get("hash"),
        )


@dataclass
class StartRequest:
    name: str
    startadv: int
    endadv: int
    frequency: int = DEFAULT_FREQUENCY
    loop: bool = False
    notify: bool = False
    email: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        if payload["email"] is None:
            del payload["email"]
        return payload


@dataclass(frozen=True)
class UserIdentity:
    uuid: int
    md5: str

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> UserIdentity:
        return cls(uuid=int(data["uuid"]), md5=str(data["md5"]))


@dataclass(frozen=True)
class StormsOptions:
    output: OutputMode = "text"


@dataclass(frozen=True)
class StartOptions:
    """Flags given to ``start``; ``None`` means "fall back to settings"."""

    name: str | None = None
    startadv: int | None = None
    endadv: int | None = None
    frequency: int | None = None
    loop: bool | None = None
    notify: bool | None = None
    email: str | None = None


@dataclass(frozen=True)
class StatusOptions:
    output: OutputMode = "text"
    name: str | None = None


@dataclass(frozen=True)
class StormNameOptions:
    name: str | None = None
