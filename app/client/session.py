# app/client/session.py
"""Client-side auth state.

The token and role live in a small JSON file under two fixed keys. A
``Session`` is created once at startup with ``Session.load`` and handed to the
``ApiClient``; ``clear`` is the logout path.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

TOKEN_KEY = "jwt_token"
USER_ROLE_KEY = "user_role"


class Session:
    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self.token: Optional[str] = None
        self.role: Optional[str] = None

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Session":
        session = cls(path)
        stored = session._read()
        session.token = stored.get(TOKEN_KEY)
        session.role = stored.get(USER_ROLE_KEY)
        return session

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def save(self, token: str, role: Optional[str] = None):
        self.token = token
        # keep the previous role when the server did not send one
        if role:
            self.role = role
        self._write()

    def clear(self):
        self.token = None
        self.role = None
        if self.path is None:
            return
        stored = self._read()
        stored.pop(TOKEN_KEY, None)
        stored.pop(USER_ROLE_KEY, None)
        self._dump(stored)

    def _read(self) -> dict:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self):
        if self.path is None:
            return
        stored = self._read()
        stored[TOKEN_KEY] = self.token
        if self.role:
            stored[USER_ROLE_KEY] = self.role
        self._dump(stored)

    def _dump(self, stored: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(stored), encoding="utf-8")
