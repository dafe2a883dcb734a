"""Linear token issuing pipeline: credential -> claims -> assertion -> token."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional, Union

from pydantic import BaseModel, ConfigDict

from .auth import ResourceFetcher, TokenExchangeClient, TokenIntrospector, TokenResponse
from .config import SatokenConfig, load_config
from .credentials import CredentialSource, ServiceAccountCredential, load_credential
from .security import build_claims, parse_private_key, sign_assertion

logger = logging.getLogger(__name__)

Clock = Callable[[], Union[int, float]]


class PipelineState(str, Enum):
    START = "START"
    CREDENTIAL_LOADED = "CREDENTIAL_LOADED"
    CLAIMS_BUILT = "CLAIMS_BUILT"
    SIGNED = "SIGNED"
    EXCHANGED = "EXCHANGED"
    INSPECTED = "INSPECTED"
    FETCHED = "FETCHED"
    DONE = "DONE"
    FAILED = "FAILED"


class PipelineResult(BaseModel):
    """Everything one run produced."""

    model_config = ConfigDict(frozen=True)

    assertion: str
    token: TokenResponse
    token_info: Optional[str] = None
    resource: Optional[str] = None

    @property
    def access_token(self) -> str:
        return self.token.access_token


class TokenPipeline:
    """Runs the stages in order; the first failure ends the run.

    Errors are re-raised unchanged after the state is set to ``FAILED``.
    """

    def __init__(
        self,
        config: Optional[SatokenConfig] = None,
        exchange_client: Optional[TokenExchangeClient] = None,
        introspector: Optional[TokenIntrospector] = None,
        fetcher: Optional[ResourceFetcher] = None,
        clock: Clock = time.time,
    ) -> None:
        self.config = config or SatokenConfig()
        timeout = self.config.http.timeout
        self._exchange_client = exchange_client or TokenExchangeClient(
            self.config.endpoints.token, timeout=timeout
        )
        self._introspector = introspector or TokenIntrospector(
            self.config.endpoints.introspect, timeout=timeout
        )
        self._fetcher = fetcher or ResourceFetcher(timeout=timeout)
        self._clock = clock
        self.state = PipelineState.START

    def _advance(self, state: PipelineState) -> None:
        logger.debug(f"pipeline {self.state.value} -> {state.value}")
        self.state = state

    def run(
        self,
        credential: ServiceAccountCredential,
        scope: Optional[str] = None,
        inquire: bool = False,
        url: Optional[str] = None,
    ) -> PipelineResult:
        """Issue a token for ``credential`` and run the optional diagnostics.

        Args:
            credential: Loaded service account credential.
            scope: Space-delimited scopes; the configured scope when omitted.
            inquire: Query the token-info endpoint for the new token.
            url: Resource to GET with the new token as bearer credential.
        """
        self.state = PipelineState.START
        try:
            self._advance(PipelineState.CREDENTIAL_LOADED)

            claims = build_claims(
                credential, scope or self.config.scope, now=self._clock()
            )
            self._advance(PipelineState.CLAIMS_BUILT)

            key = parse_private_key(credential.private_key)
            assertion = sign_assertion(claims, key)
            self._advance(PipelineState.SIGNED)

            token = self._exchange_client.exchange(assertion)
            self._advance(PipelineState.EXCHANGED)

            token_info = None
            if inquire:
                token_info = self._introspector.inspect(token.access_token)
                self._advance(PipelineState.INSPECTED)

            resource = None
            if url:
                resource = self._fetcher.fetch(url, token.access_token)
                self._advance(PipelineState.FETCHED)
        except Exception as e:
            logger.debug(f"Token pipeline failed in state {self.state.value}: {e}")
            self._advance(PipelineState.FAILED)
            raise

        self._advance(PipelineState.DONE)
        return PipelineResult(
            assertion=assertion, token=token, token_info=token_info, resource=resource
        )


def issue_token(
    source: CredentialSource,
    scope: Optional[str] = None,
    inquire: bool = False,
    url: Optional[str] = None,
    config: Optional[SatokenConfig] = None,
    clock: Clock = time.time,
) -> PipelineResult:
    """Load a credential from ``source`` and run the pipeline once."""
    config = config or load_config()
    credential = load_credential(source, token_endpoint=config.endpoints.token)
    return TokenPipeline(config=config, clock=clock).run(
        credential, scope=scope, inquire=inquire, url=url
    )
