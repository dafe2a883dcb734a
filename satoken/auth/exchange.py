"""JWT-bearer token exchange."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..constants import DEFAULT_TOKEN_ENDPOINT, FORM_CONTENT_TYPE, JWT_BEARER_GRANT_TYPE
from ..errors import ProtocolError
from .http import json_object, send

logger = logging.getLogger(__name__)


class TokenResponse(BaseModel):
    """Access token issued by the token endpoint.

    ``raw`` is the response body exactly as received.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(min_length=1, repr=False)
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    id_token: Optional[str] = Field(default=None, repr=False)
    raw: str = Field(default="", repr=False)


class TokenExchangeClient:
    """Redeems a signed assertion for an access token.

    Exactly one POST is made per ``exchange`` call; failures are not retried.
    ``timeout`` is handed to ``requests`` unchanged, ``None`` meaning no
    deadline.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_TOKEN_ENDPOINT,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.timeout = timeout

    def build_request(self, assertion: str) -> requests.Request:
        return requests.Request(
            "POST",
            self.endpoint,
            data={"assertion": assertion, "grant_type": JWT_BEARER_GRANT_TYPE},
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    def exchange(self, assertion: str) -> TokenResponse:
        """POST ``assertion`` and return the issued token.

        Raises:
            TransportError: If the endpoint cannot be reached.
            ProtocolError: If the reply is not JSON, carries an ``error`` or
                lacks ``access_token``.
        """
        logger.debug(f"assertion: {assertion.rsplit('.', 1)[0]}.<signature>")
        response = send(self.session, self.build_request(assertion), self.timeout)
        data = json_object(response, "Token endpoint")
        if "access_token" not in data:
            raise ProtocolError(
                "Token endpoint response has no access_token",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            token = TokenResponse.model_validate({**data, "raw": response.text})
        except ValidationError as e:
            raise ProtocolError(
                f"Token endpoint response is malformed: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e
        logger.info(
            f"Obtained {token.token_type or 'access'} token from {self.endpoint}"
            f" (expires_in={token.expires_in})"
        )
        return token
