"""Bearer token decoding.

Tokens are issued by the auth service and signed with the shared secret.
We only verify them and turn the payload into ``Claims``.
"""
import time

import jwt
from pydantic import ValidationError

from . import config
from .errors import InvalidTokenError
from .models import Claims


def extract_claims(token: str | None) -> Claims:
    """Verify ``token`` and return its claims.

    Accepts both a raw token and an ``Authorization`` value with a
    ``Bearer `` prefix. Expiry is checked for ``exp`` (by PyJWT) and for
    the auth service's ``ExpiresAt`` claim.

    Raises:
        InvalidTokenError: token missing, badly signed, expired or without a user ID
    """
    if not token:
        raise InvalidTokenError("Missing bearer token")

    scheme, _, credentials = token.strip().partition(" ")
    if credentials and scheme.lower() == "bearer":
        token = credentials.strip()

    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}") from e

    try:
        claims = Claims.model_validate(payload)
    except ValidationError as e:
        raise InvalidTokenError(f"Invalid token claims: {e}") from e

    if claims.expires_at is not None and claims.expires_at <= int(time.time()):
        raise InvalidTokenError("Token has expired")
    return claims
