"""
Typed failures raised by token-verification collaborators.
Infrastructure adapters translate library exceptions (httpx, jose) into these
so the application layer never depends on a third-party exception type.
"""


class TokenVerificationError(Exception):
    """Base class for collaborator failures during verification."""


class KeySetFetchError(TokenVerificationError):
    """The JWKS endpoint could not be reached or answered with an error status."""


class MalformedKeySetError(TokenVerificationError):
    """The JWKS response body is not a JSON object with a `keys` list."""


class TokenDecodeError(TokenVerificationError):
    """The token is malformed, unsigned, or its signature does not verify."""
