"""Explicit auth session shared by the HTTP client and the views."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

from .schemas.common import UserSummary

logger = logging.getLogger(__name__)


class SessionStore:
    """Persist the bearer token between launches.

    Only the token is stored; the user profile is always refetched from
    ``/auth/me``. Unreadable files are treated as "logged out".
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load_token(self) -> str | None:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return None
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable session file | path=%s", self.path)
            return None
        if not isinstance(data, dict):
            return None
        token = str(data.get("token") or "").strip()
        return token or None

    def save_token(self, token: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fh:
                json.dump({"token": token}, fh, indent=2)
        except OSError:
            logger.warning("Could not persist session token | path=%s", self.path)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove session file | path=%s", self.path)


class Session:
    """Token plus cached user; torn down on logout or a 401."""

    def __init__(self, store: SessionStore | None = None) -> None:
        self._store = store
        self.token: str | None = store.load_token() if store is not None else None
        self.user: UserSummary | None = None
        self._expired_listeners: list[Callable[[], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def login(self, token: str, user: UserSummary | None = None) -> None:
        self.token = token
        self.user = user
        if self._store is not None:
            self._store.save_token(token)

    def logout(self) -> None:
        self.token = None
        self.user = None
        if self._store is not None:
            self._store.clear()

    def on_expired(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a callback (e.g. redirect to login) fired when the token is rejected."""

        self._expired_listeners.append(listener)
        return listener

    def expire(self) -> None:
        was_authenticated = self.is_authenticated
        self.logout()
        if not was_authenticated:
            return
        logger.info("Session expired; token cleared")
        for listener in list(self._expired_listeners):
            listener()


__all__ = ["Session", "SessionStore"]
