"""Error types raised by satoken."""

from __future__ import annotations

from typing import Optional


class SatokenError(Exception):
    """Base class for all satoken failures."""


class ConfigError(SatokenError):
    """Configuration file or environment override is invalid."""


class CredentialError(SatokenError):
    """Service account credential source is unreadable or incomplete."""


class KeyFormatError(SatokenError):
    """Private key material is not a base64 PKCS8 RSA key."""


class SigningError(SatokenError):
    """Signature could not be computed."""


class TransportError(SatokenError):
    """Network or connection failure while talking to an endpoint."""


class ProtocolError(SatokenError):
    """Endpoint answered, but not with the payload we expect.

    ``error`` holds the OAuth ``error`` code when the server sent one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.body = body
