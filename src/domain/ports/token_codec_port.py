"""
Port (interface) for compact JWT signature verification and claim decoding.
Infrastructure adapters (e.g. JoseTokenCodec) must implement this interface.
"""

from abc import ABC, abstractmethod


class ITokenCodec(ABC):
    @abstractmethod
    def decode(self, token: str, key_set: dict) -> dict:
        """Verify *token* against *key_set* and return its claims.

        Only the signature is checked here; claim policy (issuer, audience,
        expiry) is left to the caller.

        Raises:
            TokenDecodeError: on any structural or cryptographic failure.
        """
        ...
