"""Clients for the OAuth2 token and token-info endpoints."""

from .exchange import TokenExchangeClient, TokenResponse
from .introspect import ResourceFetcher, TokenIntrospector

__all__ = [
    "ResourceFetcher",
    "TokenExchangeClient",
    "TokenIntrospector",
    "TokenResponse",
]
