"""
Port (interface) for JSON Web Key Set retrieval.
Infrastructure adapters (e.g. HttpxKeySetFetcher) must implement this interface.
"""

from abc import ABC, abstractmethod


class IKeySetFetcher(ABC):
    @abstractmethod
    def fetch(self, url: str) -> dict:
        """Retrieve and parse the JWKS document published at *url*.

        Raises:
            KeySetFetchError: on transport failure or a non-2xx response.
            MalformedKeySetError: if the body is not a JWKS document.
        """
        ...
