"""
Security utilities for JWT authentication and password hashing.

Every ledger row is scoped by an owner id. The owner id is the user's id and
travels in the "sub" claim of the access token.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt
from app.core.config import settings


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The 32-byte digest is well under bcrypt's limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its stored bcrypt hash."""
    return bcrypt.checkpw(_pre_hash_password(plain_password), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt after a SHA256 pre-hash."""
    hashed = bcrypt.hashpw(_pre_hash_password(password), bcrypt.gensalt())
    return hashed.decode('utf-8')


def create_access_token(owner_id: str, username: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token for an owner."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    )
    claims = {"sub": owner_id, "username": username, "exp": expire}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT token; None when it is invalid or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def get_token_owner(token: str) -> Optional[str]:
    """Owner id carried by a valid token, or None."""
    payload = decode_access_token(token)
    if not payload:
        return None
    return payload.get("sub") or None
