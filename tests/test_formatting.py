from __future__ import annotations

import json

import pytest

from replaycli.config import Settings
from replaycli.errors import PreconditionError
from replaycli.formatting import (
    count_header,
    format_api_error,
    format_identity,
    format_status,
    format_status_config,
    format_status_line,
    format_storms,
    format_storms_json,
)
from replaycli.models import StormDescriptor, StormStatusRecord, UserIdentity


@pytest.fixture
def records(status_payload):
    return {name: StormStatusRecord.from_payload(name, data) for name, data in status_payload.items()}


class TestCountHeader:
    @pytest.mark.parametrize(
        "count, expected",
        [(0, "No storms found!"), (1, "01 storm found!"), (2, "02 storms found!"), (12, "12 storms found!")],
    )
    def test_pluralization(self, count, expected):
        assert count_header(count) == expected


class TestStorms:
    def test_text_listing(self):
        storms = {"IAN": StormDescriptor("IAN", 2022, 1, 35)}
        assert format_storms(storms) == "01 storm found!\n- IAN (2022); (adv: 1-35)"

    def test_empty_listing(self):
        assert format_storms({}) == "No storms found!"

    def test_json_round_trips_server_fields(self, storms_payload):
        storms = {n: StormDescriptor.from_payload(n, d) for n, d in storms_payload.items()}
        assert json.loads(format_storms_json(storms)) == storms_payload


class TestStatus:
    def test_line_with_email(self, records):
        assert format_status_line(records["IAN"]) == (
            "- IAN (running, adv 07 @ 21600 sec, loop: no, notify: ops@example.com)"
        )

    def test_line_without_notify(self, records):
        assert format_status_line(records["KATRINA"]) == (
            "- KATRINA (stopped, adv 31 @ 00600 sec, loop: yes, notify: no)"
        )

    def test_notify_without_email(self):
        record = StormStatusRecord(
            name="X", state="running", current_adv=1, frequency=60, loop=False, notify=True
        )
        assert format_status_line(record).endswith("notify: yes)")

    def test_listing(self, records):
        lines = format_status(records).splitlines()
        assert lines[0] == "02 storms found!"
        assert len(lines) == 3

    def test_empty(self):
        assert format_status({}) == "No storms found!"


class TestStatusConfig:
    def test_block(self, records):
        block = format_status_config(records, "KATRINA", Settings())

        lines = block.splitlines()
        assert lines[0] == "# replayd: KATRINA (2005), advisories 4-31"
        assert "COLDSTARTDATE=2005081600" in lines
        assert "HINDCASTLENGTH=7.2" in lines
        assert "STORM=12" in lines
        assert "YEAR=2005" in lines
        assert "STARTADV=4" in lines
        assert "ENDADV=31" in lines
        assert "RSSSITE=stormreplay.com:80/rss/ffee99" in lines
        assert "FTPSITE=stormreplay.com" in lines
        assert "FDIR=/replayd/ffee99" in lines
        assert "HDIR=/replayd/ffee99" in lines

    def test_zero_padding_and_decimal(self, records):
        block = format_status_config(records, "IAN", Settings())
        assert "STORM=09" in block.splitlines()
        assert "HINDCASTLENGTH=5.0" in block.splitlines()

    def test_settings_drive_hosts(self, records):
        settings = Settings(ftp_host_dir="/pub/", rss_host="rss.example.com", rss_port=8080)
        block = format_status_config(records, "IAN", settings)

        assert "RSSSITE=rss.example.com:8080/rss/a1b2c3" in block.splitlines()
        assert "FDIR=/pub/a1b2c3" in block.splitlines()

    def test_unknown_storm(self, records):
        with pytest.raises(PreconditionError, match='Storm "ANDREW" doesn\'t exist in status results!'):
            format_status_config(records, "ANDREW", Settings())

    def test_incomplete_record(self):
        record = StormStatusRecord(
            name="X", state="running", current_adv=1, frequency=60, loop=False, notify=False
        )
        with pytest.raises(PreconditionError, match="missing: coldstartdate"):
            format_status_config({"X": record}, "X", Settings())


class TestIdentity:
    def test_uuid_format(self):
        assert format_identity(UserIdentity(uuid=42, md5="abc")) == "uuid: 00042 (md5: abc)"


def test_api_error():
    assert format_api_error(401, "bad signature") == "Error (401): bad signature"
