"""Gateway functions, one per replay service endpoint.

Each function sends a single signed request and returns parsed data, or
raises :class:`ApiError` when the service answers with a non-success status.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar
from urllib.parse import quote

import requests

from replaycli.client import ReplaydClient
from replaycli.errors import ApiError
from replaycli.models import StartRequest, StormDescriptor, StormStatusRecord, UserIdentity

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StatusResult:
    raw: str
    records: dict[str, StormStatusRecord]


def _error_message(res: requests.Response) -> str:
    try:
        detail = res.json()
    except ValueError:
        return res.text.strip() or (res.reason or "")
    if isinstance(detail, dict) and "msg" in detail:
        return str(detail["msg"])
    return str(detail)


def check_response(res: requests.Response) -> Any:
    """Return the decoded JSON body of a successful response.

    Raises ApiError carrying the HTTP status and the server's ``msg``
    otherwise. An empty success body decodes to ``{}``; a success body that
    is not JSON is reported as an unexpected response.
    """
    if not res.ok:
        raise ApiError(res.status_code, _error_message(res))
    if not res.content:
        return {}
    try:
        return res.json()
    except ValueError as e:
        raise _unexpected(res, e) from e


def _unexpected(res: requests.Response, error: Exception) -> ApiError:
    if isinstance(error, KeyError):
        detail = f"missing field {error}"
    else:
        detail = str(error) or type(error).__name__
    return ApiError(res.status_code, f"unexpected response: {detail}")


def _parse(res: requests.Response, parse: Callable[[Any], T]) -> T:
    """Apply ``parse`` to a checked body, reporting malformed payloads as ApiError."""
    payload = check_response(res)
    try:
        return parse(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise _unexpected(res, e) from e


def _storm_path(name: str) -> str:
    return f"/storm/{quote(name, safe='')}"


def fetch_storms(client: ReplaydClient) -> dict[str, StormDescriptor]:
    storms = _parse(
        client.get("/storms"),
        lambda payload: {
            name: StormDescriptor.from_payload(name, data) for name, data in payload.items()
        },
    )
    logger.debug(f"Fetched {len(storms)} storm descriptors")
    return storms


def configure_replay(client: ReplaydClient, request: StartRequest) -> dict[str, Any]:
    return check_response(client.post("/configure", request.to_payload()))


def fetch_status(client: ReplaydClient) -> StatusResult:
    res = client.get("/status")
    records = _parse(
        res,
        lambda payload: {
            name: StormStatusRecord.from_payload(name, data) for name, data in payload.items()
        },
    )
    return StatusResult(raw=res.text, records=records)


def next_advisory(client: ReplaydClient, name: str) -> dict[str, Any]:
    return check_response(client.post(f"{_storm_path(name)}/nextAdv"))


def delete_replay(client: ReplaydClient, name: str) -> dict[str, Any]:
    return check_response(client.delete(_storm_path(name)))


def fetch_identity(client: ReplaydClient) -> UserIdentity:
    return _parse(client.get("/uuid"), UserIdentity.from_payload)
