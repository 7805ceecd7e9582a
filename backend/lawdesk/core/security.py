"""
Password hashing and bearer token helpers.

- hash_password / verify_password: passlib CryptContext (pbkdf2_sha256).
- create_access_token / decode_access_token: PyJWT HS256 tokens carrying
  the subject id, email, law firm id and a token type ("user" or "client").

Token secret, algorithm and lifetime are read from settings on every call so
tests can adjust the environment without reloading this module.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from lawdesk.core.config import get_settings
from lawdesk.core.errors import AuthenticationError

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "TOKEN_TYPE_USER",
    "TOKEN_TYPE_CLIENT",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
]

MIN_PASSWORD_LENGTH = 6

TOKEN_TYPE_USER = "user"
TOKEN_TYPE_CLIENT = "client"

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


# -------------------------------
# Passwords
# -------------------------------

def hash_password(raw: str) -> str:
    """Hash a plaintext password; raises ValueError when it is too short."""
    if not isinstance(raw, str):
        raise TypeError("raw must be a str")
    if len(raw) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return _pwd_context.hash(raw)


def verify_password(raw: str, hashed: Optional[str]) -> bool:
    """Return True when `raw` matches the stored hash. Missing hashes never match."""
    if not raw or not hashed:
        return False
    try:
        return _pwd_context.verify(raw, hashed)
    except ValueError:
        # Unrecognized hash format
        return False


# -------------------------------
# Tokens
# -------------------------------

def create_access_token(
    *,
    subject_id: int,
    email: str,
    law_firm_id: int,
    token_type: str = TOKEN_TYPE_USER,
    role: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Sign a bearer token for a staff user or a portal client.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    lifetime = expires_minutes if expires_minutes is not None else settings.jwt_expires_minutes
    payload: Dict[str, Any] = {
        "sub": str(subject_id),
        "email": email,
        "law_firm_id": int(law_firm_id),
        "type": token_type,
        "iat": now,
        "exp": now + timedelta(minutes=lifetime),
    }
    if role is not None:
        payload["role"] = role
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, expected_type: Optional[str] = None) -> Dict[str, Any]:
    """
    Verify a bearer token and return its payload.

    Raises:
        AuthenticationError: "Token expired", "Invalid token" or, when
        `expected_type` is given and does not match, "Invalid token type".
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid token") from exc

    if expected_type is not None and payload.get("type") != expected_type:
        raise AuthenticationError("Invalid token type")

    try:
        payload["sub"] = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid token payload") from exc
    return payload
