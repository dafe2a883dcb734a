"""RSA key parsing and RS256 signing."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..errors import KeyFormatError, SigningError

_PEM_ENVELOPE = re.compile(r"-----(?:BEGIN|END) PRIVATE KEY-----")
_WHITESPACE = re.compile(r"\s+")


def _der_header(der: bytes, offset: int):
    """Return ``(tag, length, content_offset)`` of the DER element at ``offset``."""
    tag, length = der[offset], der[offset + 1]
    offset += 2
    if length & 0x80:
        size = length & 0x7F
        length = int.from_bytes(der[offset : offset + size], "big")
        offset += size
    return tag, length, offset


def _is_pkcs8(der: bytes) -> bool:
    """PrivateKeyInfo is SEQUENCE { INTEGER version, SEQUENCE algorithm, ... }.

    A PKCS1 RSAPrivateKey has an INTEGER where the algorithm SEQUENCE goes.
    """
    try:
        tag, _, offset = _der_header(der, 0)
        if tag != 0x30:
            return False
        tag, length, offset = _der_header(der, offset)
        if tag != 0x02:
            return False
        tag, _, _ = _der_header(der, offset + length)
    except IndexError:
        return False
    return tag == 0x30


def parse_private_key(pem_or_b64: str) -> rsa.RSAPrivateKey:
    """Load a PKCS8 RSA private key.

    ``pem_or_b64`` may be a full PEM block or the bare base64 body, with or
    without line breaks.

    Raises:
        KeyFormatError: If the text is not base64 PKCS8 DER of an RSA key.
    """
    if not isinstance(pem_or_b64, str):
        raise KeyFormatError(
            f"Private key must be text, got {type(pem_or_b64).__name__}"
        )
    body = _WHITESPACE.sub("", _PEM_ENVELOPE.sub("", pem_or_b64))
    if not body:
        raise KeyFormatError("Private key is empty")
    try:
        der = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyFormatError(f"Private key is not valid base64: {e}") from e
    if not _is_pkcs8(der):
        raise KeyFormatError("Private key is not PKCS8 DER (PrivateKeyInfo expected)")

    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyFormatError(f"Private key is not PKCS8 DER: {e}") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyFormatError(
            f"Private key is not an RSA key: {type(key).__name__}"
        )
    return key


def sign(message: Union[str, bytes], key: Any) -> bytes:
    """Sign ``message`` with RSASSA-PKCS1-v1_5 over SHA-256.

    Text is signed as UTF-8. PKCS1 v1.5 is deterministic, so the same key and
    message always give the same signature.

    Raises:
        SigningError: If ``key`` is not an RSA private key or signing fails.
    """
    if not isinstance(key, rsa.RSAPrivateKey):
        raise SigningError(
            f"RS256 requires an RSA private key, got {type(key).__name__}"
        )
    data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    try:
        return key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(f"RS256 signing failed: {e}") from e
