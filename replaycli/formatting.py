"""Render parsed replay service responses for the terminal."""

from __future__ import annotations

import json

from replaycli.config import Settings
from replaycli.errors import PreconditionError
from replaycli.models import StormDescriptor, StormStatusRecord, UserIdentity

_CONFIG_FIELDS = ("coldstartdate", "hindcastlength", "storm_number", "year", "hash")


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def count_header(count: int) -> str:
    if count == 0:
        return "No storms found!"
    noun = "storm" if count == 1 else "storms"
    return f"{count:02d} {noun} found!"


def format_storm_line(storm: StormDescriptor) -> str:
    return f"- {storm.name} ({storm.year}); (adv: {storm.minstartadv}-{storm.maxendadv})"


def format_storms(storms: dict[str, StormDescriptor]) -> str:
    lines = [count_header(len(storms))]
    lines += [format_storm_line(storm) for storm in storms.values()]
    return "\n".join(lines)


def format_storms_json(storms: dict[str, StormDescriptor]) -> str:
    return json.dumps({name: storm.to_payload() for name, storm in storms.items()}, indent=2)


def format_status_line(record: StormStatusRecord) -> str:
    if not record.notify:
        notify = "no"
    else:
        notify = record.email or "yes"
    return (
        f"- {record.name} ({record.state}, adv {record.current_adv:02d} @ {record.frequency:05d} sec, "
        f"loop: {yes_no(record.loop)}, notify: {notify})"
    )


def format_status(records: dict[str, StormStatusRecord]) -> str:
    lines = [count_header(len(records))]
    lines += [format_status_line(record) for record in records.values()]
    return "\n".join(lines)


def _join_host_dir(host_dir: str, content_hash: str) -> str:
    return f"{host_dir.rstrip('/')}/{content_hash}"


def format_status_config(
    records: dict[str, StormStatusRecord], name: str, settings: Settings
) -> str:
    """Shell configuration block pointing an ASGS instance at a replay.

    The block is meant to be pasted (or sourced) into an ASGS config file so
    that the forecast system picks up advisories from the replay's RSS feed
    and FTP directory instead of the live NHC ones.
    """
    record = records.get(name)
    if record is None:
        raise PreconditionError(f'Storm "{name}" doesn\'t exist in status results!')
    missing = [f for f in _CONFIG_FIELDS if getattr(record, f) is None]
    if missing:
        raise PreconditionError(f'Storm "{name}" status is missing: {", ".join(missing)}')

    startadv = record.startadv if record.startadv is not None else ""
    endadv = record.endadv if record.endadv is not None else ""
    rss = f"{settings.rss_host}:{settings.rss_port}/rss/{record.hash}"
    ftp_dir = _join_host_dir(settings.ftp_host_dir, record.hash)
    lines = [
        f"# replayd: {record.name} ({record.year}), advisories {startadv}-{endadv}",
        "TROPICALCYCLONE=on",
        "BACKGROUNDMET=off",
        f"COLDSTARTDATE={record.coldstartdate}",
        f"HINDCASTLENGTH={record.hindcastlength:.1f}",
        f"STORM={record.storm_number:02d}",
        f"YEAR={record.year}",
        f"STARTADV={startadv}",
        f"ENDADV={endadv}",
        "TRIGGER=rssembedded",
        f"RSSSITE={rss}",
        f"FTPSITE={settings.ftp_host}",
        f"FDIR={ftp_dir}",
        f"HDIR={ftp_dir}",
    ]
    return "\n".join(lines)


def format_identity(identity: UserIdentity) -> str:
    return f"uuid: {identity.uuid:05d} (md5: {identity.md5})"


def format_api_error(status: int, msg: str) -> str:
    return f"Error ({status}): {msg}"
