"""Assertion signing primitives."""

from .jws import (
    JwtClaims,
    JwtHeader,
    SigningInput,
    assemble,
    b64url,
    build_claims,
    encode_signing_input,
    sign_assertion,
)
from .keys import parse_private_key, sign

__all__ = [
    "JwtClaims",
    "JwtHeader",
    "SigningInput",
    "assemble",
    "b64url",
    "build_claims",
    "encode_signing_input",
    "parse_private_key",
    "sign",
    "sign_assertion",
]
