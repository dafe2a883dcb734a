"""Compact JWS serialization of service account assertions.

An assertion is ``b64url(header).b64url(claims).b64url(signature)`` with
unpadded base64url segments, signed with RS256.
"""

from __future__ import annotations

import base64
import logging
from typing import Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from ..constants import ASSERTION_LIFETIME, DEFAULT_SCOPE
from ..credentials import ServiceAccountCredential
from .keys import sign

logger = logging.getLogger(__name__)


def b64url(data: bytes) -> str:
    """Base64url-encode ``data`` without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class JwtHeader(BaseModel):
    """JOSE header. Only RS256 is supported."""

    model_config = ConfigDict(frozen=True)

    alg: Literal["RS256"] = "RS256"
    typ: Literal["JWT"] = "JWT"


class JwtClaims(BaseModel):
    """Claim set of a JWT-bearer assertion."""

    model_config = ConfigDict(frozen=True)

    iss: str
    scope: str = DEFAULT_SCOPE
    aud: str
    exp: int
    iat: int

    @model_validator(mode="after")
    def _check_lifetime(self) -> "JwtClaims":
        if self.exp - self.iat != ASSERTION_LIFETIME:
            raise ValueError(
                f"exp must be exactly iat + {ASSERTION_LIFETIME} seconds"
            )
        return self


class SigningInput(NamedTuple):
    signing_input: str
    header_b64: str
    claims_b64: str


def build_claims(
    credential: ServiceAccountCredential,
    scope: Optional[str] = None,
    *,
    now: Union[int, float],
) -> JwtClaims:
    """Build the claim set for ``credential`` issued at ``now``.

    ``now`` is seconds since the epoch; fractions are dropped.
    """
    iat = int(now)
    claims = JwtClaims(
        iss=credential.client_email,
        scope=scope or DEFAULT_SCOPE,
        aud=credential.token_endpoint,
        iat=iat,
        exp=iat + ASSERTION_LIFETIME,
    )
    logger.debug(f"jwt payload: {claims.model_dump_json(indent=2)}")
    return claims


def encode_signing_input(header: JwtHeader, claims: JwtClaims) -> SigningInput:
    """Encode header and claims as the ``header.claims`` signing input."""
    header_b64 = b64url(header.model_dump_json().encode("utf-8"))
    claims_b64 = b64url(claims.model_dump_json().encode("utf-8"))
    return SigningInput(f"{header_b64}.{claims_b64}", header_b64, claims_b64)


def assemble(signing_input: Union[str, SigningInput], signature: bytes) -> str:
    """Append the signature segment to ``signing_input``."""
    if isinstance(signing_input, SigningInput):
        signing_input = signing_input.signing_input
    return f"{signing_input}.{b64url(signature)}"


def sign_assertion(
    claims: JwtClaims, key, header: Optional[JwtHeader] = None
) -> str:
    """Encode, sign and assemble an assertion for ``claims``."""
    encoded = encode_signing_input(header or JwtHeader(), claims)
    signature = sign(encoded.signing_input, key)
    return assemble(encoded, signature)
