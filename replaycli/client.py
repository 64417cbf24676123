from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import requests

from .auth import API_URL, build_auth_headers
from .config import Settings

logger = logging.getLogger(__name__)


@dataclass
class ReplaydClient:
    """Thin signed HTTP client for the replay service.

    Every request gets a freshly signed set of headers; nothing about the
    signature is cached between calls. No retries are attempted.
    """

    api_key: str | None
    api_secret: str | None
    api_url: str = API_URL
    timeout: float | None = None
    clock: Callable[[], float] = field(default=time.time, repr=False)

    def __post_init__(self) -> None:
        self.api_url = self.api_url.rstrip("/")
        self.session = requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> ReplaydClient:
        return cls(
            api_key=settings.api_key,
            api_secret=settings.api_secret,
            api_url=settings.api_url,
            timeout=settings.timeout,
        )

    def request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> requests.Response:
        url = f"{self.api_url}{path}"
        headers = build_auth_headers(self.api_key, self.api_secret, self.clock)
        data = json.dumps(payload) if payload is not None else None
        logger.debug(f"{method} {url}")
        res = self.session.request(method, url, headers=headers, data=data, timeout=self.timeout)
        logger.debug(f"{method} {url} -> {res.status_code}")
        return res

    def get(self, path: str) -> requests.Response:
        return self.request("GET", path)

    def post(self, path: str, payload: dict[str, Any] | None = None) -> requests.Response:
        return self.request("POST", path, payload)

    def delete(self, path: str) -> requests.Response:
        return self.request("DELETE", path)
