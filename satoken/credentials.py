"""Service account credential loading."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import DEFAULT_TOKEN_ENDPOINT
from .errors import CredentialError

logger = logging.getLogger(__name__)

CredentialSource = Union[str, os.PathLike, Mapping[str, Any]]


class ServiceAccountCredential(BaseModel):
    """Parsed service account key file.

    Only ``client_email`` and ``private_key`` are required. Other key file
    fields are kept when present but play no part in the token exchange;
    ``token_endpoint`` is the audience and the exchange target.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    client_email: str = Field(min_length=1)
    private_key: str = Field(min_length=1, repr=False)
    private_key_id: Optional[str] = None
    client_id: Optional[str] = None
    project_id: Optional[str] = None
    token_uri: Optional[str] = None
    type: Optional[Literal["service_account"]] = None
    token_endpoint: str = DEFAULT_TOKEN_ENDPOINT

    @property
    def issuer_email(self) -> str:
        return self.client_email

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], token_endpoint: Optional[str] = None
    ) -> "ServiceAccountCredential":
        """Validate a decoded key file."""
        if not isinstance(data, Mapping):
            raise CredentialError(
                f"Credential source must be a JSON object, got {type(data).__name__}"
            )
        values = dict(data)
        # the endpoint is never taken from the key file itself
        values.pop("token_endpoint", None)
        if token_endpoint:
            values["token_endpoint"] = token_endpoint
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) for err in e.errors()
            )
            raise CredentialError(
                f"That does not look like a service account key file "
                f"(invalid or missing: {fields})"
            ) from e

    @classmethod
    def from_json(
        cls, text: str, token_endpoint: Optional[str] = None
    ) -> "ServiceAccountCredential":
        """Parse a key file document."""
        try:
            data = json.loads(text)
        except ValueError as e:
            raise CredentialError(f"Credential source is not valid JSON: {e}") from e
        return cls.from_mapping(data, token_endpoint=token_endpoint)


def load_credential(
    source: CredentialSource, token_endpoint: Optional[str] = None
) -> ServiceAccountCredential:
    """Load a service account credential from a key file path or a mapping.

    Args:
        source: Path to a JSON key file, or an already decoded mapping.
        token_endpoint: Override for the token endpoint the assertion targets.

    Raises:
        CredentialError: If the file cannot be read, is not a JSON object or
            lacks ``client_email`` / ``private_key``.
    """
    if isinstance(source, Mapping):
        return ServiceAccountCredential.from_mapping(
            source, token_endpoint=token_endpoint
        )

    path = os.fspath(source)
    logger.debug(f"Loading service account credential from {path}")
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise CredentialError(f"Cannot read credential file {path}: {e}") from e
    credential = ServiceAccountCredential.from_json(text, token_endpoint=token_endpoint)
    logger.info(f"Loaded credential for {credential.client_email}")
    return credential
