# brandmate/api/routers/auth.py
import logging

from fastapi import APIRouter, Depends, status

from brandmate.api.deps import get_current_user
from brandmate.core.errors import AccountDeactivated, AuthenticationFailure, ValidationError
from brandmate.core.security import create_access_token
from brandmate.models.user import User
from brandmate.schemas.auth import (
    AuthData,
    AuthResponse,
    LoginIn,
    MessageResponse,
    ProfileData,
    ProfileResponse,
    RegisterIn,
    user_to_out,
)
from brandmate.services import credentials

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterIn):
    """
    Register a new user account and sign it in.

    Args:
        body: Request body containing:
            - username: str (unique, case-sensitive)
            - email: str (unique, compared case-insensitively)
            - password: str (hashed before storage)

    Returns:
        AuthResponse: `{success, message, data: {user, token}}` with status 201

    Raises:
        ValidationError (400): Missing or malformed fields
        DuplicateIdentity (409): Username or email already registered
    """
    credentials.validate_registration(body.username, body.email, body.password)
    user = await credentials.create_user(body.username, body.email, body.password)
    token = create_access_token(str(user.id))
    return AuthResponse(
        message="User registered successfully",
        data=AuthData(user=user_to_out(user), token=token),
    )

@router.post("/login", response_model=AuthResponse)
async def login(body: LoginIn):
    """
    Authenticate with a username or email and a password.

    The password is checked before the account state, so a deactivated
    account is only reported to someone who knows its password. Unknown
    identifiers and wrong passwords produce the same 401.

    Raises:
        ValidationError (400): Missing login or password
        AuthenticationFailure (401): Invalid credentials
        AccountDeactivated (401): Correct credentials, inactive account
    """
    if not body.login or not body.password:
        raise ValidationError("Username/email and password are required")

    user = await credentials.find_by_login_or_email(body.login)
    if not credentials.verify_user_password(user, body.password):
        logger.info("[auth] login failed for identifier=%r", body.login)
        raise AuthenticationFailure()
    if not user.is_active:
        logger.info("[auth] login refused, account deactivated id=%s", user.id)
        raise AccountDeactivated()

    await credentials.record_login(user)
    token = create_access_token(str(user.id))
    logger.info("[auth] login ok id=%s username=%s", user.id, user.username)
    return AuthResponse(
        message="Login successful",
        data=AuthData(user=user_to_out(user), token=token),
    )

@router.get("/profile", response_model=ProfileResponse)
async def profile(user: User = Depends(get_current_user)):
    """Return the user bound to the bearer token."""
    return ProfileResponse(data=ProfileData(user=user_to_out(user)))

@router.post("/logout", response_model=MessageResponse)
async def logout(user: User = Depends(get_current_user)):
    """
    Acknowledge a logout.

    Tokens are not revoked server-side; the client drops its copy. The
    endpoint still requires a valid token so a stale client learns about it.
    """
    logger.info("[auth] logout id=%s", user.id)
    return MessageResponse(message="Logout successful")
