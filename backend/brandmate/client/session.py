# brandmate/client/session.py
"""
Client session lifecycle.

SessionContext is the single holder of "who is logged in" for a client
process. It is created once at startup and handed to whatever needs auth
status; only its contents change. AuthOrchestrator is the only thing that
changes them, through login, register, check_auth_status and logout.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from brandmate.client.api import ApiClient, ApiFailure, NetworkError
from brandmate.client.storage import SessionStore
from brandmate.schemas.auth import AuthResponse, UserOut

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please try again."

Listener = Callable[["SessionContext"], None]


@dataclass(frozen=True)
class AuthResult:
    success: bool
    message: str


class SessionContext:
    """
    Observable authentication state.

    Attributes:
        is_loading: True until the startup check has finished
        user: Cached identity of the logged-in user, or None
        token: Bearer token, or None
    """

    def __init__(self):
        self.is_loading: bool = True
        self.user: Optional[UserOut] = None
        self.token: Optional[str] = None
        self._listeners: List[Listener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes) -> None:
        for key, value in changes.items():
            setattr(self, key, value)
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Session listener failed")


class AuthOrchestrator:
    """
    Coordinates login, registration, startup re-validation and logout
    between the API, the persistent SessionStore and a SessionContext.

    None of the operations raise for expected failures; each returns an
    AuthResult the UI can show as-is.
    """

    def __init__(self, api: ApiClient, store: SessionStore, context: Optional[SessionContext] = None):
        self.api = api
        self.store = store
        self.context = context or SessionContext()

    def _authenticate(self, token: str, user: UserOut) -> None:
        if not self.store.set(token, user):
            logger.warning("Session for %s will not survive a restart", user.username)
        self.context._update(token=token, user=user)

    def _clear(self) -> None:
        self.store.clear()
        self.context._update(token=None, user=None)

    async def _sign_in(self, call, what: str, default_message: str) -> AuthResult:
        try:
            result = await call
        except NetworkError:
            return AuthResult(False, NETWORK_ERROR_MESSAGE)
        if isinstance(result, AuthResponse):
            self._authenticate(result.data.token, result.data.user)
            logger.info("%s succeeded for %s", what, result.data.user.username)
            return AuthResult(True, result.message)
        logger.info("%s rejected (%s): %s", what, result.status_code, result.message)
        return AuthResult(False, result.message or default_message)

    async def login(self, identifier: str, password: str) -> AuthResult:
        """Log in with a username or email. Prior session state survives a failure."""
        return await self._sign_in(self.api.login(identifier, password), "Login", "Login failed")

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create an account and log into it; server messages are passed through verbatim."""
        return await self._sign_in(
            self.api.register(username, email, password), "Registration", "Registration failed"
        )

    async def check_auth_status(self) -> AuthResult:
        """
        Restore the persisted session at startup and re-validate it.

        An empty store leaves the client logged out without any request.
        Otherwise the stored session is shown right away and then checked
        against the profile endpoint; any failure (401, network error,
        timeout) clears it. `is_loading` is False afterwards in every case.
        """
        try:
            stored = self.store.get()
            if stored is None:
                return AuthResult(False, "Not logged in")

            self.context._update(token=stored.token, user=stored.user)
            try:
                result = await self.api.profile(stored.token)
            except NetworkError:
                logger.warning("Session check failed on network, logging out locally")
                self._clear()
                return AuthResult(False, NETWORK_ERROR_MESSAGE)

            if isinstance(result, ApiFailure):
                logger.info("Stored session rejected by server (%s): %s", result.status_code, result.message)
                self._clear()
                return AuthResult(False, result.message)

            self._authenticate(stored.token, result.data.user)
            return AuthResult(True, "Session restored")
        except Exception:
            logger.exception("Error checking auth status")
            self._clear()
            return AuthResult(False, "Session check failed")
        finally:
            self.context._update(is_loading=False)

    async def logout(self) -> AuthResult:
        """
        Tell the server (best effort) and drop the local session.
        Local state is cleared even when the request fails or times out.
        """
        token = self.context.token
        try:
            if token:
                result = await self.api.logout(token)
                if isinstance(result, ApiFailure):
                    logger.info("Logout endpoint answered %s: %s", result.status_code, result.message)
        except Exception as e:
            logger.error("Logout error: %s", e)
        finally:
            self._clear()
        return AuthResult(True, "Logged out")
