"""
Password hashing and bearer tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt
from tripplanner.core.config import settings


def _pre_hash_password(password: str) -> bytes:
    """
    SHA256 the password first so bcrypt never sees more than 72 bytes.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return bcrypt.checkpw(_pre_hash_password(plain_password), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    hashed = bcrypt.hashpw(_pre_hash_password(password), bcrypt.gensalt())
    return hashed.decode('utf-8')


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a JWT whose subject is the user id."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    claims = {"sub": user_id, "exp": datetime.now(timezone.utc) + expires_delta}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def get_token_subject(token: str) -> Optional[str]:
    """User id carried by a valid token, or None if the token is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")
