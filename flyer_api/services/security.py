# flyer_api/services/security.py

"""
Password hashing and bearer tokens.

Tokens are HS256 JWTs carrying ``userId``, ``email`` and ``exp``. They are
issued at registration and login and verified on every protected request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from flyer_api.config import get_settings
from flyer_api.exceptions import UnauthenticatedError


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as resolved from a bearer token."""

    user_id: str
    email: str


_pwd_context: Optional[CryptContext] = None


def _context() -> CryptContext:
    global _pwd_context
    if _pwd_context is None:
        _pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=get_settings().PASSWORD_HASH_ROUNDS,
        )
    return _pwd_context


def hash_password(password: str) -> str:
    return _context().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return _context().verify(password, password_hash)


def create_access_token(
    user_id: str,
    email: str,
    *,
    expires_in: Optional[timedelta] = None,
) -> str:
    settings = get_settings()
    if expires_in is None:
        expires_in = timedelta(minutes=settings.ACCESS_TOKEN_TTL_MINUTES)

    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify ``token`` and return its claims.

    Raises UnauthenticatedError for expired, tampered or malformed tokens,
    and for tokens that lack a ``userId`` claim.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise UnauthenticatedError("Token has expired") from None
    except JWTError:
        raise UnauthenticatedError("Token is not valid") from None

    if not claims.get("userId"):
        raise UnauthenticatedError("Token is not valid")
    return claims


__all__ = [
    "Identity",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
]
