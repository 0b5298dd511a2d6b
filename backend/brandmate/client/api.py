# brandmate/client/api.py
"""
HTTP client for the BrandMate API.

Every call is a single round trip through an httpx.AsyncClient with a
timeout. The response is parsed into the endpoint's success model or into
an ApiFailure carrying the server's message. Connectivity problems and
timeouts raise NetworkError.
"""
import logging
from typing import Literal, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from brandmate.config import settings
from brandmate.schemas.auth import AuthResponse, MessageResponse, ProfileResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class NetworkError(Exception):
    """The request never produced an HTTP response (connect error, timeout, ...)."""


class ApiFailure(BaseModel):
    success: Literal[False] = False
    status_code: Optional[int] = None
    error: Optional[str] = None
    message: str


class NameSaved(BaseModel):
    success: bool = True
    message: str
    data: dict


class ApiEndpoints:
    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.names = f"{self.base_url}/api/names"
        self.health = f"{self.base_url}/api/health"
        self.register = f"{self.base_url}/api/auth/register"
        self.login = f"{self.base_url}/api/auth/login"
        self.logout = f"{self.base_url}/api/auth/logout"
        self.profile = f"{self.base_url}/api/auth/profile"


class ApiClient:
    """
    Typed access to the auth and names endpoints.

    Args:
        base_url: API root (default: settings.api_base_url)
        timeout: Seconds before a request fails with NetworkError
        transport: Optional httpx transport (ASGITransport in tests)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoints = ApiEndpoints(base_url or settings.api_base_url)
        self.timeout = timeout if timeout is not None else settings.client_timeout_sec
        self.transport = transport

    async def _request(
        self,
        method: str,
        url: str,
        model: Type[T],
        default_message: str,
        token: Optional[str] = None,
        json: Optional[dict] = None,
    ) -> Union[T, ApiFailure]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.request(method, url, headers=headers, json=json)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %r", method, url, e)
            raise NetworkError(str(e)) from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.is_success and isinstance(body, dict) and body.get("success"):
            try:
                return model.model_validate(body)
            except ValidationError as e:
                logger.error("Unexpected response shape from %s: %s", url, e)
                return ApiFailure(status_code=resp.status_code, message=default_message)

        body = body if isinstance(body, dict) else {}
        return ApiFailure(
            status_code=resp.status_code,
            error=body.get("error"),
            message=body.get("message") or default_message,
        )

    async def login(self, login: str, password: str) -> Union[AuthResponse, ApiFailure]:
        return await self._request(
            "POST", self.endpoints.login, AuthResponse, "Login failed",
            json={"login": login, "password": password},
        )

    async def register(self, username: str, email: str, password: str) -> Union[AuthResponse, ApiFailure]:
        return await self._request(
            "POST", self.endpoints.register, AuthResponse, "Registration failed",
            json={"username": username, "email": email, "password": password},
        )

    async def profile(self, token: str) -> Union[ProfileResponse, ApiFailure]:
        return await self._request("GET", self.endpoints.profile, ProfileResponse, "Session check failed", token=token)

    async def logout(self, token: str) -> Union[MessageResponse, ApiFailure]:
        return await self._request("POST", self.endpoints.logout, MessageResponse, "Logout failed", token=token)

    async def save_name(self, full_name: str, token: Optional[str] = None) -> Union[NameSaved, ApiFailure]:
        """Submit a name; the bearer token is attached when the user is logged in."""
        return await self._request(
            "POST", self.endpoints.names, NameSaved, "Error saving the name.",
            token=token, json={"fullName": full_name},
        )
