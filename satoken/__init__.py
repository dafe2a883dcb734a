"""satoken: OAuth2 access tokens for service accounts via the JWT-bearer grant."""

from .auth import ResourceFetcher, TokenExchangeClient, TokenIntrospector, TokenResponse
from .config import SatokenConfig, load_config
from .credentials import ServiceAccountCredential, load_credential
from .errors import (
    ConfigError,
    CredentialError,
    KeyFormatError,
    ProtocolError,
    SatokenError,
    SigningError,
    TransportError,
)
from .pipeline import PipelineResult, PipelineState, TokenPipeline, issue_token
from .security import JwtClaims, JwtHeader, build_claims, parse_private_key, sign

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "CredentialError",
    "JwtClaims",
    "JwtHeader",
    "KeyFormatError",
    "PipelineResult",
    "PipelineState",
    "ProtocolError",
    "ResourceFetcher",
    "SatokenConfig",
    "SatokenError",
    "ServiceAccountCredential",
    "SigningError",
    "TokenExchangeClient",
    "TokenIntrospector",
    "TokenPipeline",
    "TokenResponse",
    "TransportError",
    "build_claims",
    "issue_token",
    "load_config",
    "load_credential",
    "parse_private_key",
    "sign",
]
