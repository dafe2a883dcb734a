"""Diagnostic calls made with an issued access token."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from ..constants import DEFAULT_INTROSPECT_ENDPOINT
from .http import check_status, json_object, send

logger = logging.getLogger(__name__)


class TokenIntrospector:
    """Asks the token-info endpoint what it knows about a token."""

    def __init__(
        self,
        endpoint: str = DEFAULT_INTROSPECT_ENDPOINT,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.timeout = timeout

    def inspect(self, token: str) -> str:
        """Return the token-info body for ``token`` unmodified."""
        request = requests.Request(
            "GET", self.endpoint, params={"access_token": token}
        )
        response = send(self.session, request, self.timeout)
        json_object(response, "Token info endpoint")
        return response.text


class ResourceFetcher:
    """GETs a URL with the token as a bearer credential."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, url: str, token: str) -> str:
        request = requests.Request(
            "GET", url, headers={"Authorization": f"Bearer {token}"}
        )
        response = send(self.session, request, self.timeout)
        try:
            data = response.json()
        except ValueError:
            data = None
        check_status(response, url, data if isinstance(data, dict) else None)
        return response.text
