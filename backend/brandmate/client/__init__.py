"""
Client-side session handling for BrandMate apps.

Typical wiring at app start:

    context = SessionContext()
    auth = AuthOrchestrator(ApiClient(), SessionStore(FileStorage(settings.session_file)), context)
    await auth.check_auth_status()
"""
from brandmate.config import settings

from .api import ApiClient, ApiFailure, NetworkError
from .session import AuthOrchestrator, AuthResult, SessionContext
from .storage import FileStorage, MemoryStorage, SessionStore, StoredSession


def create_auth(storage=None, api=None) -> AuthOrchestrator:
    """Build an orchestrator backed by the configured session file and API URL."""
    store = SessionStore(storage if storage is not None else FileStorage(settings.session_file))
    return AuthOrchestrator(api or ApiClient(), store, SessionContext())


__all__ = [
    "ApiClient",
    "ApiFailure",
    "NetworkError",
    "AuthOrchestrator",
    "AuthResult",
    "SessionContext",
    "FileStorage",
    "MemoryStorage",
    "SessionStore",
    "StoredSession",
    "create_auth",
]
