# fintrack/services/security.py
"""Password hashing + JWT helpers.

We use passlib pbkdf2_sha256 (pure-python) to avoid bcrypt backend issues.
JWT encode/decode uses python-jose.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Union, Dict, Any
from passlib.context import CryptContext
from jose import jwt, JWTError
from fintrack.core.config import settings

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(getattr(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", 60))
SECRET_KEY = getattr(settings, "SECRET_KEY", "change-me-in-prod")  # ensure it's present in env in prod


def hash_password(password: str) -> str:
    """Hash a plaintext password (never store plaintext)."""
    if password is None:
        raise ValueError("password cannot be None")
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify plain password against hashed. Returns False for missing or malformed hashes."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def create_access_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token with subject (the user id).
    - subject is stored under 'sub' as a string
    - 'iat' and 'exp' included (exp as int timestamp)
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    payload: Dict[str, Any] = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT. Raises JWTError on invalid or expired tokens.
    Returns the payload dict (contains 'sub', 'exp', etc).
    """
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def token_subject(token: str) -> int:
    """Return the user id encoded in a valid token; raises JWTError otherwise."""
    payload = decode_access_token(token)
    sub = payload.get("sub")
    if sub is None:
        raise JWTError("token has no subject")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise JWTError("token subject is not a user id")
