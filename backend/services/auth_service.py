"""
JWT bearer-token authentication.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt  # PyJWT

from constants import AuthConfig
from exceptions import AuthError
from services.interfaces import IAuthenticator


def _now() -> datetime:
    return datetime.now(timezone.utc)


def get_bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an "Authorization: Bearer <token>" header value.

    Raises:
        AuthError: If the header is missing or uses another scheme
    """
    if not authorization:
        raise AuthError("Couldn't find JWT")

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != AuthConfig.BEARER_SCHEME or not token:
        raise AuthError("Authorization header must use the Bearer scheme")
    return token


def create_access_token(
    user_id: str,
    secret: str,
    algorithm: str = AuthConfig.DEFAULT_ALGORITHM,
    expires_minutes: int = AuthConfig.DEFAULT_EXPIRES_MINUTES,
) -> str:
    """Issue a signed access token whose subject is user_id."""
    payload = {
        "sub": user_id,
        "iat": int(_now().timestamp()),
        "exp": int((_now() + timedelta(minutes=expires_minutes)).timestamp()),
        "iss": AuthConfig.TOKEN_ISSUER,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


class JWTAuthenticator(IAuthenticator):
    """Verifies HS256 access tokens issued by create_access_token."""

    def __init__(self, secret: str, algorithm: str = AuthConfig.DEFAULT_ALGORITHM):
        self.secret = secret
        self.algorithm = algorithm

    def verify(self, credential: str) -> str:
        if not credential:
            raise AuthError("Couldn't find JWT")
        try:
            payload = jwt.decode(
                credential,
                self.secret,
                algorithms=[self.algorithm],
                issuer=AuthConfig.TOKEN_ISSUER,
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthError("Couldn't validate JWT")

        subject = payload.get("sub")
        if not subject:
            raise AuthError("Token has no subject")
        return subject
