# brandmate/services/credentials.py
"""
Credential store: lookup, creation and password checks for user accounts.

Username matching is exact (case-sensitive); emails are trimmed and
lowercased before they are stored or looked up.
"""
import datetime as dt
import logging
import re

from tortoise.exceptions import IntegrityError

from brandmate.core.errors import DuplicateIdentity, ValidationError
from brandmate.core.security import dummy_verify, hash_password, verify_password
from brandmate.models.user import Role, User

logger = logging.getLogger("uvicorn.error")

USERNAME_MIN, USERNAME_MAX = 3, 30
PASSWORD_MIN = 6
# matches users.email column width
EMAIL_MAX = 254
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")

def normalize_email(email: str) -> str:
    return email.strip().lower()

def validate_registration(username: str, email: str, password: str) -> None:
    """
    Check registration input before touching the database.

    Raises:
        ValidationError: With a message suitable for showing to the user
    """
    if not username or not email or not password:
        raise ValidationError("Username, email, and password are required")
    username = username.strip()
    if not USERNAME_MIN <= len(username) <= USERNAME_MAX:
        raise ValidationError(f"Username must be between {USERNAME_MIN} and {USERNAME_MAX} characters")
    if not USERNAME_RE.match(username):
        raise ValidationError("Username may only contain letters, numbers, dots, dashes and underscores")
    email = normalize_email(email)
    if len(email) > EMAIL_MAX:
        raise ValidationError(f"Email must be at most {EMAIL_MAX} characters")
    if not EMAIL_RE.match(email):
        raise ValidationError("Please provide a valid email address")
    if len(password) < PASSWORD_MIN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN} characters long")

async def find_by_login_or_email(identifier: str) -> User | None:
    """
    Resolve a login identifier to a user.

    An exact username match wins; otherwise the identifier is tried as an
    email, case-insensitively.
    """
    identifier = (identifier or "").strip()
    if not identifier:
        return None
    user = await User.get_or_none(username=identifier)
    if user:
        return user
    return await User.get_or_none(email=normalize_email(identifier))

async def create_user(username: str, email: str, password: str, role: Role = Role.USER) -> User:
    """
    Create a user account.

    Raises:
        DuplicateIdentity: Username or email already registered. Also raised
            when a concurrent registration wins the race and the unique
            constraint rejects this insert.
    """
    username = username.strip()
    email = normalize_email(email)

    if await User.filter(email=email).exists():
        raise DuplicateIdentity("Email already registered")
    if await User.filter(username=username).exists():
        raise DuplicateIdentity("Username already taken")

    try:
        user = await User.create(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
    except IntegrityError:
        logger.info("[auth] unique constraint rejected registration for username=%s", username)
        raise DuplicateIdentity("Username or email already registered")
    logger.info("[auth] registered user id=%s username=%s", user.id, user.username)
    return user

def verify_user_password(user: User | None, password: str) -> bool:
    """
    Check a password for a possibly missing user.

    A missing user still costs one full hash verification, so callers cannot
    tell "no such account" from "wrong password" by response time.
    """
    if user is None:
        return dummy_verify(password)
    return verify_password(password, user.password_hash)

async def record_login(user: User) -> None:
    user.last_login = dt.datetime.now(dt.timezone.utc)
    await user.save(update_fields=["last_login", "updated_at"])
