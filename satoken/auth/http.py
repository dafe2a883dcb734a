"""Shared request/response handling for the OAuth endpoints."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..errors import ProtocolError, TransportError

logger = logging.getLogger(__name__)


def send(
    session: requests.Session,
    request: requests.Request,
    timeout: Optional[float] = None,
) -> requests.Response:
    """Send ``request`` once.

    Invalid URLs and transport failures become ``TransportError``.
    """
    try:
        prepared = session.prepare_request(request)
        logger.debug(f"{prepared.method} {_redact(prepared.url)}")
        response = session.send(prepared, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"{request.method} {_redact(request.url)} failed: {e}") from e
    logger.debug(f"{response.status_code} from {_redact(request.url)}")
    return response


def json_object(response: requests.Response, what: str) -> Dict[str, Any]:
    """Decode the body of ``response`` as a JSON object.

    Raises:
        ProtocolError: If the body is not a JSON object, carries an OAuth
            ``error`` field, or the status code signals failure.
    """
    body = response.text
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ProtocolError(
            f"{what} response is not JSON (HTTP {response.status_code})",
            status_code=response.status_code,
            body=body,
        ) from e
    if not isinstance(data, dict):
        raise ProtocolError(
            f"{what} response is not a JSON object",
            status_code=response.status_code,
            body=body,
        )
    check_status(response, what, data)
    return data


def check_status(
    response: requests.Response, what: str, data: Optional[Dict[str, Any]] = None
) -> None:
    """Raise ``ProtocolError`` for OAuth error payloads and HTTP failures."""
    error = data.get("error") if data else None
    if error is not None:
        if isinstance(error, dict):
            # Google APIs nest the error object: {"error": {"code", "message", "status"}}
            code = error.get("status") or str(error.get("code", ""))
            description = error.get("message")
        else:
            code = str(error)
            description = data.get("error_description")
        message = f"{what} returned error {code!r}"
        if description:
            message += f": {description}"
        raise ProtocolError(
            message,
            status_code=response.status_code,
            error=code,
            body=response.text,
        )
    if response.status_code >= 400:
        raise ProtocolError(
            f"{what} returned HTTP {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )


def _redact(url: Optional[str]) -> str:
    """Drop the query string, which may carry an access token."""
    return (url or "").split("?", 1)[0]
