"""
FastAPI entry point: Composition Root for the HTTP service.

Wires the infrastructure adapters (HttpxKeySetFetcher, JoseTokenCodec) and
the environment config into a TokenVerifier, then exposes a dependency that
turns verification outcomes into HTTP errors. The verifier itself never maps
outcomes to status codes; that happens only here.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:create_app --factory --port 8000
"""

from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from src.application.services.token_verifier import TokenVerifier
from src.infrastructure.auth.httpx_key_set_fetcher import HttpxKeySetFetcher
from src.infrastructure.auth.jose_token_codec import JoseTokenCodec
from src.infrastructure.config.env_config import (
    load_jwks_timeout,
    load_log_level,
    load_verifier_config,
)
from src.infrastructure.observability.logging_config import configure_logging


class CurrentUser(BaseModel):
    sub: str
    email: Optional[str] = None
    username: Optional[str] = None


def build_verifier() -> TokenVerifier:
    """Build a TokenVerifier from the process environment (and .env, if present)."""
    load_dotenv()
    config = load_verifier_config()
    configure_logging(load_log_level())
    return TokenVerifier(
        config=config,
        key_fetcher=HttpxKeySetFetcher(timeout=load_jwks_timeout()),
        codec=JoseTokenCodec(),
    )


def create_app(verifier: Optional[TokenVerifier] = None) -> FastAPI:
    verifier = verifier or build_verifier()
    app = FastAPI(title="Cognito ID Token Verifier")

    def get_current_user(request: Request) -> CurrentUser:
        """FastAPI dependency: verify the Cognito ID token in the Authorization header."""
        result = verifier.authenticate(request)
        if result.outcome.is_infrastructure_failure:
            raise HTTPException(status_code=503, detail=result.outcome.value)
        if not result.is_verified:
            raise HTTPException(
                status_code=401,
                detail=result.outcome.value,
                headers={"WWW-Authenticate": "Bearer"},
            )
        claims = result.claims
        return CurrentUser(
            sub=claims["sub"],
            email=claims.get("email"),
            username=claims.get("cognito:username"),
        )

    @app.get("/me", response_model=CurrentUser)
    def read_current_user(user: CurrentUser = Depends(get_current_user)):
        return user

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
