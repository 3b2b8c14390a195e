"""
Domain entity for the Cognito user pool a verifier trusts.
Zero external dependencies: pure Python dataclass only.
"""

from dataclasses import dataclass

IDP_HOST_TEMPLATE = "https://cognito-idp.{region}.amazonaws.com"


@dataclass(frozen=True)
class VerifierConfig:
    region: str
    pool_id: str
    client_id: str

    def __post_init__(self) -> None:
        for field_name in ("region", "pool_id", "client_id"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{field_name} must be a non-empty string")

    @property
    def issuer_base_uri(self) -> str:
        return IDP_HOST_TEMPLATE.format(region=self.region)

    @property
    def issuer(self) -> str:
        """Exact value the `iss` claim must carry."""
        return f"{self.issuer_base_uri}/{self.pool_id}"

    @property
    def jwks_url(self) -> str:
        return f"{self.issuer}/.well-known/jwks.json"
