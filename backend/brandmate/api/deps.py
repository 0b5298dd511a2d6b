# brandmate/api/deps.py
import logging
import uuid

import jwt
from fastapi import Depends, Header

from brandmate.core.errors import (
    AccountDeactivated,
    AppError,
    InvalidToken,
    PermissionDenied,
    Unauthenticated,
)
from brandmate.core.security import decode_access_token
from brandmate.models.user import Role, User

logger = logging.getLogger("uvicorn.error")


def extract_bearer(authorization: str | None) -> str | None:
    """Return the token from an `Authorization: Bearer <token>` header, if any."""
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        return token or None
    return None


async def resolve_user(token: str | None) -> User:
    """
    Resolve a bearer token to a live user.

    Outcomes:
        - no token                   -> Unauthenticated
        - bad signature / malformed  -> InvalidToken
        - user no longer exists      -> InvalidToken
        - user deactivated           -> AccountDeactivated
        - otherwise                  -> the User

    Raises:
        AppError subclasses listed above (all 401)
    """
    if not token:
        raise Unauthenticated()

    try:
        payload = decode_access_token(token)
    except jwt.InvalidTokenError:
        raise InvalidToken()

    user = await User.get_or_none(id=payload["sub"]) if _is_uuid(payload["sub"]) else None
    if not user:
        raise InvalidToken()
    if not user.is_active:
        logger.info("[auth] rejected token for deactivated user id=%s", user.id)
        raise AccountDeactivated()
    return user


def _is_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class SessionGate:
    """
    FastAPI dependency guarding a route with the bearer token.

    Args:
        required: True rejects every non-authenticated outcome with its 401.
            False lets the request through with `None` instead of a user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            ...

        @router.post("/open")
        async def open_route(user: User | None = Depends(get_optional_user)):
            ...
    """

    def __init__(self, required: bool = True):
        self.required = required

    async def __call__(self, authorization: str | None = Header(default=None)) -> User | None:
        token = extract_bearer(authorization)
        if self.required:
            return await resolve_user(token)
        if not token:
            return None
        try:
            return await resolve_user(token)
        except AppError:
            return None


get_current_user = SessionGate(required=True)
get_optional_user = SessionGate(required=False)


async def require_admin(current: User = Depends(get_current_user)) -> User:
    """
    FastAPI dependency to ensure the current user is an administrator.

    Raises:
        PermissionDenied (403): If user is not an admin
        AuthenticationFailure (401): If user is not authenticated
    """
    if current.role != Role.ADMIN:
        raise PermissionDenied()
    return current
