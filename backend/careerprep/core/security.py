"""
Password hashing and access tokens
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from careerprep.core.config import settings
from careerprep.core.exceptions import UnauthorizedError


def hash_password(password: str) -> str:
    """Salt and hash a plain-text password"""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    """
    Issue a signed bearer token for the given user id

    Args:
        subject: user id placed in the "sub" claim
        expires_minutes: lifetime override (defaults to settings)
    """
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Verify a bearer token and return its subject"""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")

    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError("Invalid or expired token")
    return subject
