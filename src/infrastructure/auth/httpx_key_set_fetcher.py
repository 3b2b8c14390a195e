"""
Infrastructure adapter: Cognito JWKS endpoint over httpx → IKeySetFetcher.

A plain blocking GET on every call. httpx errors and unparseable bodies are
translated into the domain's KeySetFetchError / MalformedKeySetError so the
application layer never sees an httpx type.
"""

import httpx
import structlog

from src.domain.exceptions import KeySetFetchError, MalformedKeySetError
from src.domain.ports.key_set_fetcher_port import IKeySetFetcher

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpxKeySetFetcher(IKeySetFetcher):
    """Fetches a user pool's public JSON Web Key Set."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._timeout = timeout

    def fetch(self, url: str) -> dict:
        try:
            response = httpx.get(url, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("jwks fetch failed", url=url, error=str(exc))
            raise KeySetFetchError(f"Could not fetch JWKS from {url}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedKeySetError(f"JWKS response from {url} is not JSON") from exc

        if not isinstance(body, dict) or not isinstance(body.get("keys"), list):
            raise MalformedKeySetError(f"JWKS response from {url} has no 'keys' list")

        logger.debug("jwks fetched", url=url, keys_count=len(body["keys"]))
        return body
