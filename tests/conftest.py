"""Shared fixtures: an RSA signing key, its JWKS, and a token factory."""

from types import SimpleNamespace

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from src.domain.entities.verifier_config import VerifierConfig
from src.domain.ports.key_set_fetcher_port import IKeySetFetcher

NOW = 1_700_000_000
KID = "test-key-1"
REGION = "us-east-1"
POOL_ID = "us-east-1_TestPool"
CLIENT_ID = "test-client-id"
ISSUER = f"https://cognito-idp.{REGION}.amazonaws.com/{POOL_ID}"


def _generate_private_pem() -> str:
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


def _public_jwk(private_pem: str, kid: str) -> dict:
    private_key = serialization.load_pem_private_key(private_pem.encode(), password=None)
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    key = jwk.construct(public_pem, "RS256").to_dict()
    key.update({"kid": kid, "use": "sig"})
    return key


class FakeKeySetFetcher(IKeySetFetcher):
    """Returns a fixed key set (or raises) and records every requested URL."""

    def __init__(self, key_set=None, error=None):
        self.key_set = key_set
        self.error = error
        self.requested_urls = []

    def fetch(self, url):
        self.requested_urls.append(url)
        if self.error is not None:
            raise self.error
        return self.key_set


@pytest.fixture(scope="session")
def private_pem():
    return _generate_private_pem()


@pytest.fixture(scope="session")
def other_private_pem():
    return _generate_private_pem()


@pytest.fixture(scope="session")
def key_set(private_pem):
    return {"keys": [_public_jwk(private_pem, KID)]}


@pytest.fixture
def config():
    return VerifierConfig(region=REGION, pool_id=POOL_ID, client_id=CLIENT_ID)


@pytest.fixture
def valid_claims():
    return {
        "sub": "3f1c2a9e-0000-4000-8000-000000000001",
        "iss": ISSUER,
        "aud": CLIENT_ID,
        "token_use": "id",
        "cognito:username": "jane",
        "email": "jane@example.com",
        "at_hash": "dGhpcy1pcy1ub3QtY2hlY2tlZA",
        "iat": NOW - 60,
        "exp": NOW + 3600,
    }


@pytest.fixture
def make_token(private_pem, valid_claims):
    def _make(overrides=None, remove=(), pem=None, kid=KID):
        claims = {**valid_claims, **(overrides or {})}
        for name in remove:
            claims.pop(name, None)
        return jwt.encode(claims, pem or private_pem, algorithm="RS256", headers={"kid": kid})

    return _make


@pytest.fixture
def make_request():
    def _make(headers=None):
        return SimpleNamespace(headers=headers or {})

    return _make


@pytest.fixture
def fake_fetcher(key_set):
    return FakeKeySetFetcher(key_set=key_set)
