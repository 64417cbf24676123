from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from replaycli.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from real credentials, settings and .env files."""
    for key in ["REPLAYD_APIKEY", "REPLAYD_APISECRET", "REPLAYD_CONFIG"]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_response():
    """Factory for mock ``requests.Response`` objects."""

    def _make(status_code: int = 200, payload=None, text: str | None = None) -> Mock:
        res = Mock()
        res.status_code = status_code
        res.ok = status_code < 400
        res.reason = "OK" if res.ok else "Error"
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        res.text = text
        res.content = text.encode()
        if payload is not None:
            res.json.return_value = payload
        else:
            res.json.side_effect = ValueError("No JSON object could be decoded")
        return res

    return _make


@pytest.fixture
def settings():
    return Settings(api_key="key123", api_secret="s3cret")


@pytest.fixture
def storms_payload():
    """Sample ``GET /storms`` body."""
    return {
        "IAN": {"year": 2022, "minstartadv": 1, "maxendadv": 35},
        "KATRINA": {"year": 2005, "minstartadv": 4, "maxendadv": 31},
    }


@pytest.fixture
def status_payload():
    """Sample ``GET /status`` body with config/status sections per storm."""
    return {
        "IAN": {
            "config": {
                "name": "IAN",
                "frequency": 21600,
                "loop": False,
                "notify": True,
                "email": "ops@example.com",
                "startadv": 1,
                "endadv": 35,
                "year": 2022,
                "stormnumber": 9,
                "coldstartdate": "2022091800",
                "hindcastlength": 5,
                "hash": "a1b2c3",
            },
            "status": {"state": "running", "currentadv": 7},
        },
        "KATRINA": {
            "config": {
                "name": "KATRINA",
                "frequency": 600,
                "loop": True,
                "notify": False,
                "startadv": 4,
                "endadv": 31,
                "year": 2005,
                "stormnumber": 12,
                "coldstartdate": "2005081600",
                "hindcastlength": 7.25,
                "hash": "ffee99",
            },
            "status": {"state": "stopped", "currentadv": 31},
        },
    }
