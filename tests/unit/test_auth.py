"""Unit tests for bearer token decoding."""
import time

import jwt
import pytest

from lms.auth import extract_claims
from lms.errors import InvalidTokenError
from lms.models import Claims


def test_extract_claims(test_token):
    claims = extract_claims(test_token)

    assert isinstance(claims, Claims)
    assert claims.user_id == 1000000
    assert claims.full_user_name == "Admin Admin"
    assert claims.expires_at is not None


def test_extract_claims_with_bearer_prefix(test_token):
    assert extract_claims(f"Bearer {test_token}") == extract_claims(test_token)


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_malformed_token(token):
    with pytest.raises(InvalidTokenError):
        extract_claims(token)


def test_wrong_signature(token_factory):
    with pytest.raises(InvalidTokenError):
        extract_claims(token_factory(secret="someone-else-signed-this-token-0123456789"))


def test_expired_token(token_factory):
    with pytest.raises(InvalidTokenError):
        extract_claims(token_factory(expires_in=-60))


def test_token_without_user_id():
    from lms import config

    token = jwt.encode({"full_user_name": "Nobody"}, config.JWT_SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        extract_claims(token)


def issuer_token(expires_at: int) -> str:
    """Token in the auth service's own claim layout."""
    from lms import config

    payload = {"UserID": 1000000, "FullUserName": "Admin Admin", "ExpiresAt": expires_at}
    return jwt.encode(payload, config.JWT_SECRET, algorithm="HS256")


def test_extract_issuer_claim_names():
    expires_at = int(time.time()) + 3600

    claims = extract_claims(issuer_token(expires_at))

    assert claims == Claims(user_id=1000000, full_user_name="Admin Admin", expires_at=expires_at)


def test_expired_issuer_token():
    with pytest.raises(InvalidTokenError):
        extract_claims(issuer_token(int(time.time()) - 60))
