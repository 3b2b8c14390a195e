"""
Environment → VerifierConfig.

Variable names follow the deployment's existing AWS_* convention. The .env
file, if any, is loaded by the entrypoint before this runs.
"""

import os
from collections.abc import Mapping
from typing import Optional

from src.domain.entities.verifier_config import VerifierConfig
from src.infrastructure.auth.httpx_key_set_fetcher import DEFAULT_TIMEOUT_SECONDS

REGION_VAR = "AWS_REGION"
POOL_ID_VAR = "AWS_COGNITO_POOL_ID"
CLIENT_ID_VAR = "AWS_COGNITO_CLIENT_ID"
TIMEOUT_VAR = "JWKS_TIMEOUT_SECONDS"
LOG_LEVEL_VAR = "LOG_LEVEL"


def load_verifier_config(environ: Optional[Mapping[str, str]] = None) -> VerifierConfig:
    """Build a VerifierConfig from *environ* (defaults to os.environ).

    Raises:
        ValueError: if a required variable is missing or blank.
    """
    environ = os.environ if environ is None else environ
    values = {}
    for field_name, var in (
        ("region", REGION_VAR),
        ("pool_id", POOL_ID_VAR),
        ("client_id", CLIENT_ID_VAR),
    ):
        value = environ.get(var, "").strip()
        if not value:
            raise ValueError(f"Environment variable {var} must be set")
        values[field_name] = value
    return VerifierConfig(**values)


def load_jwks_timeout(environ: Optional[Mapping[str, str]] = None) -> float:
    environ = os.environ if environ is None else environ
    raw = environ.get(TIMEOUT_VAR)
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"{TIMEOUT_VAR} must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"{TIMEOUT_VAR} must be positive, got {raw!r}")
    return timeout


def load_log_level(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return environ.get(LOG_LEVEL_VAR, "info")
