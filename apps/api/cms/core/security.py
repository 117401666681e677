# apps/api/cms/core/security.py
# bcrypt_sha256 uzun parolaları (72 byte sınırı) sorunsuz işler; eski "bcrypt"
# hash'leri de doğrulanabilsin diye listede duruyor.

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from cms.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
)

MAX_PASSWORD_LEN = 4096


def hash_password(password: str) -> str:
    if not isinstance(password, str):
        password = str(password or "")
    if len(password) > MAX_PASSWORD_LEN:
        password = password[:MAX_PASSWORD_LEN]
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Unknown or corrupt hash formats verify as False so the caller answers
    401 instead of 500.
    """
    try:
        return pwd_context.verify(plain_password or "", hashed_password or "")
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str, role: str, expires_minutes: Optional[int] = None) -> str:
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": sub,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except JWTError:
        return None
