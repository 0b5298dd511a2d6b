# brandmate/core/security.py
"""
Security module for authentication.
Handles password hashing and JWT token creation/validation.

Tokens carry only the user id (`sub`) and the issue time (`iat`). There is no
`exp` claim: a token stays valid for as long as its signature verifies under
JWT_SECRET and the user it names exists and is active. Rotating JWT_SECRET is
the only way to invalidate every outstanding token at once.
"""
import datetime as dt
import logging
import jwt  # PyJWT
from passlib.context import CryptContext

from brandmate.config import settings, DEV_JWT_SECRET

logger = logging.getLogger("uvicorn.error")

# Password hashing context (argon2, salted per hash)
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

# JWT configuration
JWT_SECRET = settings.jwt_secret
JWT_ALG = "HS256"  # HMAC SHA-256

# Hash verified when the login identifier matches nobody, so both failure paths cost the same
_DUMMY_HASH: str | None = None

def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False

def dummy_verify(plain: str) -> bool:
    """Burn one hash verification against a throwaway hash; always False."""
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("brandmate-dummy-password")
    pwd_context.verify(plain, _DUMMY_HASH)
    return False

def create_access_token(user_id: str) -> str:
    """
    Create a JWT access token bound to a user id.

    Args:
        user_id: Unique user identifier (UUID string)

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID)
        - iat: Issued at timestamp
    """
    payload = {
        "sub": str(user_id),
        "iat": dt.datetime.now(dt.timezone.utc),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, tampered with,
            signed with another secret, or has no `sub` claim
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG], options={"require": ["sub"]})

def warn_if_default_secret() -> None:
    if JWT_SECRET == DEV_JWT_SECRET and not settings.is_development:
        logger.warning("[security] JWT_SECRET is the development default; set a strong secret in production")
