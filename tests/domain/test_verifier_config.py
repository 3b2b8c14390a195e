import dataclasses

import pytest

from src.domain.entities.verification import VerificationOutcome, VerificationResult
from src.domain.entities.verifier_config import VerifierConfig


def test_derived_uris():
    config = VerifierConfig(region="ap-northeast-1", pool_id="ap-northeast-1_AbC", client_id="cid")

    assert config.issuer_base_uri == "https://cognito-idp.ap-northeast-1.amazonaws.com"
    assert config.issuer == "https://cognito-idp.ap-northeast-1.amazonaws.com/ap-northeast-1_AbC"
    assert config.jwks_url == (
        "https://cognito-idp.ap-northeast-1.amazonaws.com/ap-northeast-1_AbC/.well-known/jwks.json"
    )


@pytest.mark.parametrize("field", ["region", "pool_id", "client_id"])
def test_blank_fields_are_rejected(field):
    values = {"region": "us-east-1", "pool_id": "pool", "client_id": "cid", field: "  "}
    with pytest.raises(ValueError, match=field):
        VerifierConfig(**values)


def test_config_is_immutable(config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.client_id = "other"


def test_only_verified_result_is_verified():
    assert VerificationResult(VerificationOutcome.VERIFIED, {"sub": "x"}).is_verified
    assert not VerificationResult(VerificationOutcome.EXPIRED_ERROR).is_verified


def test_infrastructure_outcomes():
    infrastructure = {o for o in VerificationOutcome if o.is_infrastructure_failure}
    assert infrastructure == {
        VerificationOutcome.KEY_FETCH_ERROR,
        VerificationOutcome.MALFORMED_KEY_SET,
    }
