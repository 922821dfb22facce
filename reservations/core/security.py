"""Bearer-token verification for the identity provider.

Tokens are issued by the authentication service; this module only checks
the signature and expiry and reads the subject and role claims.
"""

from typing import Any

from jose import JWTError, jwt

from reservations.config import settings
from reservations.core.authorization import Identity
from reservations.core.exceptions import AuthenticationError


def verify_token(token: str, token_type: str = "access") -> dict[str, Any]:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise AuthenticationError(f"Token validation failed: {str(e)}")
    if payload.get("type", token_type) != token_type:
        raise AuthenticationError("Invalid token type")
    return payload


def identity_from_token(token: str) -> Identity:
    """Build the caller identity from an access token."""
    payload = verify_token(token, token_type="access")
    subject_id = payload.get("sub")
    role = payload.get("role")
    if not subject_id or not role:
        raise AuthenticationError("Invalid token payload")
    return Identity(subject_id=str(subject_id), role=str(role))
