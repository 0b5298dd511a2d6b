# brandmate/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates a default admin user on first startup.
"""
import logging

from brandmate.config import settings
from brandmate.core.security import hash_password
from brandmate.models.user import Role, User
from brandmate.services.credentials import normalize_email

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> User | None:
    """
    If no admin exists in the database, create a default admin from settings.
    Only takes effect under the following conditions:
      - Currently no user with role="admin"
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Settings:
      ADMIN_USERNAME (default: "admin")
      ADMIN_EMAIL    (default: "admin@example.com")
      ADMIN_PASSWORD (required, otherwise won't create)

    Returns:
        The created admin, or None when nothing was created
    """
    if await User.filter(role=Role.ADMIN).exists():
        return None

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return None

    admin_email = normalize_email(settings.admin_email)
    if await User.filter(email=admin_email).exists():
        logger.warning("[bootstrap] ADMIN_EMAIL=%s already belongs to a user -> skip creating default admin.", admin_email)
        return None

    # If username is already taken by a regular account, create a non-conflicting name
    admin_username = base_username = settings.admin_username
    suffix = 1
    while await User.filter(username=admin_username).exists():
        suffix += 1
        admin_username = f"{base_username}{suffix}"

    u = await User.create(
        username=admin_username,
        email=admin_email,
        password_hash=hash_password(settings.admin_password),
        role=Role.ADMIN,
    )
    logger.warning("[bootstrap] Created default admin -> username=%s email=%s id=%s",
                   u.username, u.email, u.id)
    return u
