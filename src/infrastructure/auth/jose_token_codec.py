"""
Infrastructure adapter: python-jose → ITokenCodec.

Selects the JWK whose `kid` matches the token header, checks the header's
`alg` against the permitted algorithms, and verifies the signature. Claim
validation (exp, aud, iss, at_hash) is switched off here; the
TokenVerifier checks claims itself, in a fixed order, after this returns.
"""

from typing import Iterable

from jose import jwt
from jose.exceptions import JOSEError

from src.domain.exceptions import TokenDecodeError
from src.domain.ports.token_codec_port import ITokenCodec

# Cognito signs ID tokens with RS256 only.
DEFAULT_ALGORITHMS = ("RS256",)

_SIGNATURE_ONLY = {
    "verify_signature": True,
    "verify_aud": False,
    "verify_iat": False,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


class JoseTokenCodec(ITokenCodec):
    """Verifies compact JWS tokens against a JWKS document."""

    def __init__(self, algorithms: Iterable[str] = DEFAULT_ALGORITHMS) -> None:
        self._algorithms = tuple(algorithms)

    def decode(self, token: str, key_set: dict) -> dict:
        try:
            header = jwt.get_unverified_header(token)
        except JOSEError as exc:
            raise TokenDecodeError("Token header could not be decoded") from exc

        alg = header.get("alg")
        if alg not in self._algorithms:
            raise TokenDecodeError(f"Algorithm {alg!r} is not permitted")

        kid = header.get("kid")
        key = next(
            (
                candidate
                for candidate in key_set.get("keys", [])
                if isinstance(candidate, dict) and candidate.get("kid") == kid
            ),
            None,
        )
        if key is None:
            raise TokenDecodeError(f"No key in JWKS matches kid {kid!r}")
        if key.get("alg", alg) != alg:
            raise TokenDecodeError(f"Key {kid!r} is not for algorithm {alg!r}")

        try:
            return jwt.decode(token, key, algorithms=[alg], options=_SIGNATURE_ONLY)
        except (JOSEError, KeyError, TypeError, ValueError) as exc:
            raise TokenDecodeError("Token signature could not be verified") from exc
