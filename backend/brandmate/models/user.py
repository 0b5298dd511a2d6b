# brandmate/models/user.py
"""
Database model for users.
Represents a user account: login identity, password hash, role and account state.
"""
import uuid
from enum import Enum
from tortoise import fields, models

class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"

class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as an argon2 hash, never plain text
    - Username (case-sensitive) and email (stored lowercase) carry unique
      constraints, so concurrent registrations cannot both succeed
    - Accounts are deactivated through `is_active`, never deleted
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    username = fields.CharField(max_length=30, unique=True, index=True)
    email = fields.CharField(max_length=254, unique=True, index=True)
    password_hash = fields.CharField(max_length=255)
    role = fields.CharEnumField(Role, max_length=16, default=Role.USER)
    is_active = fields.BooleanField(default=True)
    last_login = fields.DatetimeField(null=True)  # Set on every successful login
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    def __str__(self) -> str:
        return self.username
