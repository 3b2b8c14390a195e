"""
Domain entities for the outcome of verifying a bearer ID token.
Zero external dependencies: a str Enum and a frozen dataclass only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class VerificationOutcome(str, Enum):
    """Closed set of results; the first failing check wins."""

    VERIFIED = "verified"
    NO_AUTH_HEADER = "no_auth_header"
    NIL_TOKEN = "nil_token"
    INVALID_TOKEN_ERROR = "invalid_token_error"
    ISSUER_ERROR = "issuer_error"
    TOKEN_USE_ERROR = "token_use_error"
    CLIENT_ID_ERROR = "client_id_error"
    NO_SUBJECT_ERROR = "no_subject_error"
    EXPIRED_ERROR = "expired_error"
    KEY_FETCH_ERROR = "key_fetch_error"
    MALFORMED_KEY_SET = "malformed_key_set"

    @property
    def is_infrastructure_failure(self) -> bool:
        return self in (
            VerificationOutcome.KEY_FETCH_ERROR,
            VerificationOutcome.MALFORMED_KEY_SET,
        )


@dataclass(frozen=True)
class VerificationResult:
    outcome: VerificationOutcome
    claims: Optional[dict[str, Any]] = None

    @property
    def is_verified(self) -> bool:
        return self.outcome is VerificationOutcome.VERIFIED
