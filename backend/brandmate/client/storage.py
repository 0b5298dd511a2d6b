# brandmate/client/storage.py
"""
Client-side session persistence.

KeyValueStorage backends hold string values under string keys and accept
multi-key writes/removals in a single call, so a backend can commit the
token and the cached user together. SessionStore is the only component that
reads or writes the two session keys, and it never raises: every storage
failure is logged and treated as "no session".
"""
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol

from pydantic import ValidationError

from brandmate.schemas.auth import UserOut

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
USER_KEY = "userData"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_items(self, items: Mapping[str, str]) -> None: ...

    def remove_items(self, keys: Iterable[str]) -> None: ...


class MemoryStorage:
    """In-process storage; contents are lost when the process exits."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_items(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def remove_items(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)


class FileStorage:
    """
    JSON-file storage (default: ~/.brandmate/session.json).

    Each write rewrites the whole document through a temp file and
    os.replace, so readers see either the old pair or the new pair.
    The file is created with 0600 permissions.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        """Read the document; an unparseable file counts as empty and is overwritten on the next write."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring session file %s: not a JSON object", self.path)
            return {}
        return data

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.chmod(tmp, 0o600)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_items(self, items: Mapping[str, str]) -> None:
        data = self._load()
        data.update(items)
        self._dump(data)

    def remove_items(self, keys: Iterable[str]) -> None:
        data = self._load()
        for key in keys:
            data.pop(key, None)
        self._dump(data)


@dataclass(frozen=True)
class StoredSession:
    token: str
    user: UserOut


class SessionStore:
    """
    Persists the session token and the cached user as one unit.

    Args:
        storage: Backend holding the `authToken` and `userData` keys
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def set(self, token: str, user: UserOut) -> bool:
        """
        Persist a session.

        Returns:
            True if written. On failure the store is cleared (best effort)
            so a half-written pair is never left behind.
        """
        try:
            self.storage.set_items({TOKEN_KEY: token, USER_KEY: user.model_dump_json()})
            return True
        except Exception as e:
            logger.error("Failed to save session: %s", e)
            self.clear()
            return False

    def get(self) -> Optional[StoredSession]:
        """
        Read the persisted session.

        Returns:
            The stored session, or None when empty, incomplete, unreadable
            or corrupt (the latter three are also cleared)
        """
        try:
            token = self.storage.get_item(TOKEN_KEY)
            raw_user = self.storage.get_item(USER_KEY)
        except Exception as e:
            logger.error("Failed to read session: %s", e)
            self.clear()
            return None

        if not token and not raw_user:
            return None
        if not token or not raw_user:
            logger.warning("Incomplete session in storage, clearing it")
            self.clear()
            return None
        try:
            user = UserOut.model_validate_json(raw_user)
        except ValidationError as e:
            logger.warning("Corrupt cached user in storage, clearing session: %s", e)
            self.clear()
            return None
        return StoredSession(token=token, user=user)

    def clear(self) -> None:
        try:
            self.storage.remove_items([TOKEN_KEY, USER_KEY])
        except Exception as e:
            logger.error("Failed to clear session: %s", e)
