"""
Bearer token issuing and verification (HS256).

Tokens carry the user's id, name, email and role name.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Optional

import jwt

from backoffice.core.config import settings
from backoffice.utils.time import utc_now


@dataclass
class TokenVerification:
    """Outcome of decoding a bearer token."""

    valid: bool
    role: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        data: Claims to embed (id, name, email, role)
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_HOURS
    """
    to_encode = dict(data)
    expire = utc_now() + (expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS))
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenVerification:
    """
    Verify signature and expiry of ``token``.

    Never raises; failures come back as ``valid=False`` with a reason.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        return TokenVerification(valid=False, error="Token expired")
    except jwt.InvalidTokenError:
        return TokenVerification(valid=False, error="Invalid token")

    role = payload.get("role")
    if not role:
        return TokenVerification(valid=False, error="Token has no role")

    return TokenVerification(valid=True, role=role, claims=payload)
