# brandmate/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.

Shared by the server (request bodies, response shapes) and by
brandmate.client, which parses every endpoint's response into one of the
success models below or into an ApiFailure.
"""
import datetime as dt
from typing import Literal
from pydantic import BaseModel

__all__ = [
    "RegisterIn",
    "LoginIn",
    "UserOut",
    "AuthData",
    "AuthResponse",
    "ProfileData",
    "ProfileResponse",
    "MessageResponse",
    "ErrorResponse",
    "user_to_out",
]

def _iso(value: dt.datetime | None) -> str | None:
    return value.isoformat() if value else None

# ========== Input models ==========
class RegisterIn(BaseModel):
    """
    Request body for POST /api/auth/register.
    Fields default to "" so a missing field becomes a 400, not a pydantic 422.
    """
    username: str = ""
    email: str = ""
    password: str = ""

class LoginIn(BaseModel):
    """Request body for POST /api/auth/login; `login` is a username or an email."""
    login: str = ""
    password: str = ""

# ========== Output models ==========
class UserOut(BaseModel):
    """
    Public view of a user. Never contains the password hash.
    Also the shape cached by the client session store.
    """
    id: str
    username: str
    email: str
    role: Literal["user", "admin"] = "user"
    isActive: bool = True
    lastLogin: str | None = None
    createdAt: str | None = None

class AuthData(BaseModel):
    user: UserOut
    token: str

class AuthResponse(BaseModel):
    """Success body of register and login."""
    success: Literal[True] = True
    message: str
    data: AuthData

class ProfileData(BaseModel):
    user: UserOut

class ProfileResponse(BaseModel):
    success: Literal[True] = True
    data: ProfileData

class MessageResponse(BaseModel):
    success: Literal[True] = True
    message: str

class ErrorResponse(BaseModel):
    """Body of every failure response."""
    success: Literal[False] = False
    error: str
    message: str

def user_to_out(user) -> UserOut:
    """
    Convert a User model instance to its public representation.

    Args:
        user: brandmate.models.User instance
    """
    role = getattr(user.role, "value", user.role)
    return UserOut(
        id=str(user.id),
        username=user.username,
        email=user.email,
        role=role,
        isActive=user.is_active,
        lastLogin=_iso(user.last_login),
        createdAt=_iso(user.created_at),
    )
