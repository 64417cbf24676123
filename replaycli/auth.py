from __future__ import annotations

import base64
import hashlib
import os
import time
from collections.abc import Callable
from dataclasses import dataclass

from replaycli.utils.env import load_env_file_if_present

API_URL = "https://stormreplay.com/api"
API_VERSION = "0.1"

NONCE_SCALE = 100_000


@dataclass(frozen=True)
class SignedRequestContext:
    api_key: str
    api_secret: str
    nonce: str
    signature: str
    authorization: str

    def headers(self) -> dict[str, str]:
        return {
            "x-auth-nonce": self.nonce,
            "Authorization": self.authorization,
            "x-replayd-api-version": API_VERSION,
            "Content-Type": "application/json",
        }


def make_nonce(now: float) -> str:
    """Return the request nonce for wall-clock time ``now`` (seconds)."""
    return str(int(now * NONCE_SCALE))


def compute_signature(nonce: str, api_secret: str) -> str:
    """sha256 hex digest of the nonce followed by the shared secret."""
    return hashlib.sha256(f"{nonce}{api_secret}".encode()).hexdigest()


def sign_request(
    api_key: str | None,
    api_secret: str | None,
    clock: Callable[[], float] | None = None,
) -> SignedRequestContext:
    """Build a fresh signing context for a single request.

    Empty credentials still produce a well formed (but server-rejected)
    signature; validating them is left to the server.
    """
    key = api_key or ""
    secret = api_secret or ""
    nonce = make_nonce((clock or time.time)())
    signature = compute_signature(nonce, secret)
    token = base64.b64encode(f"{key}:{signature}".encode()).decode("ascii")
    return SignedRequestContext(
        api_key=key,
        api_secret=secret,
        nonce=nonce,
        signature=signature,
        authorization=token,
    )


def build_auth_headers(
    api_key: str | None,
    api_secret: str | None,
    clock: Callable[[], float] | None = None,
) -> dict[str, str]:
    return sign_request(api_key, api_secret, clock).headers()


def load_credentials(
    key_env: str = "REPLAYD_APIKEY",
    secret_env: str = "REPLAYD_APISECRET",
    dotenv: bool = True,
) -> tuple[str | None, str | None]:
    """Return (api_key, api_secret) from the environment or .env.

    Either value is None when unset; the settings file may still supply it.
    """
    if dotenv:
        load_env_file_if_present()
    return os.getenv(key_env) or None, os.getenv(secret_env) or None
