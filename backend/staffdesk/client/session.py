from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from staffdesk.core.logging import get_logger
from staffdesk.core.security import read_unverified_expiry

logger = get_logger(__name__)

TOKEN_KEY = "auth_token"
USER_KEY = "current_user"


class TokenStore:
    """Small JSON file holding the session token and the signed-in user."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            content = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("session_store_unreadable", path=str(self.path), error=str(exc))
            return {}
        return content if isinstance(content, dict) else {}

    def save_session(self, token: str, user: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({TOKEN_KEY: token, USER_KEY: user}, indent=2), encoding="utf-8")
        # Token grants API access; keep it private to the owner.
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class ClientSession:
    """Client-side view of the login state.

    An expired or unreadable token is never reported as logged in; noticing
    one clears the stored session.
    """

    def __init__(self, store: TokenStore, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)) -> None:
        self.store = store
        self._clock = clock

    @property
    def token(self) -> Optional[str]:
        token = self.store.load().get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    @property
    def current_user(self) -> Optional[dict[str, Any]]:
        user = self.store.load().get(USER_KEY)
        return user if isinstance(user, dict) else None

    @property
    def username(self) -> Optional[str]:
        user = self.current_user
        return user.get("username") if user else None

    @property
    def user_id(self) -> Optional[int]:
        user = self.current_user
        return user.get("id") if user else None

    def start(self, token: str, user: dict[str, Any]) -> None:
        self.store.save_session(token, user)
        logger.info("client_login", username=user.get("username"))

    def is_token_expired(self) -> bool:
        token = self.token
        if token is None:
            return True
        expires_at = read_unverified_expiry(token)
        return expires_at is None or expires_at <= self._clock()

    def is_logged_in(self) -> bool:
        if self.token is None:
            return False
        if self.is_token_expired():
            logger.info("client_session_expired", username=self.username)
            self.logout()
            return False
        return self.current_user is not None

    def logout(self) -> None:
        username = self.username
        self.store.clear()
        logger.info("client_logout", username=username)

    def session_info(self) -> dict[str, Any]:
        token_exists = self.token is not None
        return {
            "token_exists": token_exists,
            "token_valid": token_exists and not self.is_token_expired(),
            "user": self.current_user,
        }
