"""
Application service: verify the Cognito ID token carried by an HTTP request.
Depends only on Domain ports, entities and exceptions; the HTTP client and
the JWT library are injected as IKeySetFetcher / ITokenCodec adapters.

Control flow per call is strictly linear:
    extract bearer token -> fetch JWKS -> verify signature -> check claims

Claims are checked in a fixed order and the first failure is returned, so a
token that is both from the wrong issuer and the wrong token_use reports
ISSUER_ERROR. Nothing is cached; every call fetches the key set again.
"""

import time
from collections.abc import Mapping
from numbers import Real
from typing import Any, Callable, Optional

import structlog

from src.domain.entities.verification import VerificationOutcome, VerificationResult
from src.domain.entities.verifier_config import VerifierConfig
from src.domain.exceptions import KeySetFetchError, MalformedKeySetError, TokenDecodeError
from src.domain.ports.key_set_fetcher_port import IKeySetFetcher
from src.domain.ports.token_codec_port import ITokenCodec

logger = structlog.get_logger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_SCHEME = "bearer"
ID_TOKEN_USE = "id"


class TokenVerifier:
    def __init__(
        self,
        config: VerifierConfig,
        key_fetcher: IKeySetFetcher,
        codec: ITokenCodec,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            config:      The user pool and app client this verifier trusts.
            key_fetcher: IKeySetFetcher implementation (e.g. HttpxKeySetFetcher).
            codec:       ITokenCodec implementation (e.g. JoseTokenCodec).
            clock:       Returns the current POSIX time; injectable for tests.
        """
        self._config = config
        self._key_fetcher = key_fetcher
        self._codec = codec
        self._clock = clock

    @property
    def config(self) -> VerifierConfig:
        return self._config

    def verify(self, request: Any) -> VerificationOutcome:
        """Return the verification outcome for *request*'s Authorization header."""
        return self.authenticate(request).outcome

    def authenticate(self, request: Any) -> VerificationResult:
        """Verify *request* and return the outcome plus, on success, its claims.

        *request* is any object exposing a ``headers`` mapping.
        """
        headers = getattr(request, "headers", None) or {}
        header_value = _find_header(headers, AUTHORIZATION_HEADER)
        if header_value is None:
            return self._reject(VerificationOutcome.NO_AUTH_HEADER)

        token = _extract_token(header_value)
        if not token:
            return self._reject(VerificationOutcome.NIL_TOKEN)

        try:
            key_set = self._key_fetcher.fetch(self._config.jwks_url)
        except KeySetFetchError as exc:
            return self._reject(VerificationOutcome.KEY_FETCH_ERROR, exc)
        except MalformedKeySetError as exc:
            return self._reject(VerificationOutcome.MALFORMED_KEY_SET, exc)

        try:
            claims = self._codec.decode(token, key_set)
        except TokenDecodeError as exc:
            return self._reject(VerificationOutcome.INVALID_TOKEN_ERROR, exc)

        failure = self._check_claims(claims)
        if failure is not None:
            return self._reject(failure)

        logger.debug("token verified", sub=claims["sub"])
        return VerificationResult(outcome=VerificationOutcome.VERIFIED, claims=claims)

    def _check_claims(self, claims: Mapping[str, Any]) -> Optional[VerificationOutcome]:
        # Runs only on claims whose signature has already been verified.
        if claims.get("iss") != self._config.issuer:
            return VerificationOutcome.ISSUER_ERROR
        if claims.get("token_use") != ID_TOKEN_USE:
            return VerificationOutcome.TOKEN_USE_ERROR
        if claims.get("aud") != self._config.client_id:
            return VerificationOutcome.CLIENT_ID_ERROR
        if not claims.get("sub"):
            return VerificationOutcome.NO_SUBJECT_ERROR

        issued_at, expires_at = claims.get("iat"), claims.get("exp")
        if not _is_timestamp(issued_at) or not _is_timestamp(expires_at):
            return VerificationOutcome.EXPIRED_ERROR
        now = self._clock()
        if not (issued_at <= now < expires_at):
            return VerificationOutcome.EXPIRED_ERROR
        return None

    @staticmethod
    def _reject(
        outcome: VerificationOutcome, exc: Optional[Exception] = None
    ) -> VerificationResult:
        if exc is None:
            logger.warning("token rejected", outcome=outcome.value)
        else:
            logger.warning("token rejected", outcome=outcome.value, error=type(exc).__name__)
        return VerificationResult(outcome=outcome)


def _find_header(headers: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup; multi-valued headers yield the first value."""
    if name in headers:
        value = headers[name]
    else:
        lowered = name.lower()
        value = next(
            (v for k, v in headers.items() if isinstance(k, str) and k.lower() == lowered),
            None,
        )
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    return value


def _extract_token(header_value: str) -> Optional[str]:
    """Take the last whitespace-separated segment, ignoring a leading scheme word.

    Deliberately lenient: "Bearer abc", "bearer abc" and a bare "abc" all
    yield "abc".
    """
    segments = str(header_value).split()
    if segments and segments[0].lower() == BEARER_SCHEME:
        segments = segments[1:]
    return segments[-1] if segments else None


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)
