"""Bearer token verification and FastAPI security dependency.

This module decodes tokens minted by `services.AuthService` and
provides `require_client`, the dependency guarding every mutating
endpoint. Verification checks signature, issuer, audience and expiry
with no clock-skew leeway; any failure raises HTTPException(401) so it
can be used directly inside route dependencies.
"""

from typing import Optional
from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt
from .config import settings
from .services import JWT_ALGORITHM

bearer_scheme = HTTPBearer(auto_error=False)

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Returns the decoded payload on success or raises an HTTPException
    with status 401 on failure.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            leeway=0,
            options={"require": ["exp", "iss", "aud", "sub", "jti"]},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail='token expired', headers=_CHALLENGE)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail='invalid token', headers=_CHALLENGE)


def require_client(credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme)) -> dict:
    """FastAPI dependency returning the verified token claims.

    A missing or non-bearer `Authorization` header is reported as 401
    rather than FastAPI's default 403.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail='not authenticated', headers=_CHALLENGE)
    return decode_token(credentials.credentials)
