from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from staffdesk.core.errors import AuthError
from staffdesk.core.logging import get_logger
from staffdesk.core.observability import login_counter
from staffdesk.core.security import TokenClaims, TokenIssuer, burn_password_check, verify_password
from staffdesk.repositories.admin_users import AdminUserRepository, check_credentials_shape
from staffdesk.storage import AdminUserRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: AdminUserRecord


class AuthService:
    def __init__(self, users: AdminUserRepository, issuer: TokenIssuer) -> None:
        self.users = users
        self.issuer = issuer

    def login(self, username: Any, password: Any) -> LoginResult:
        cleaned = check_credentials_shape(username, password)
        logger.info("login_attempt", username=cleaned)

        user = self.users.get_by_username(cleaned)
        if user is None:
            burn_password_check()
            valid = False
        else:
            valid = verify_password(password, user.password_hash)

        if not valid:
            login_counter.add(1, {"outcome": "failure"})
            logger.info("login_failed", username=cleaned)
            raise AuthError("Invalid credentials")

        token = self.issuer.issue(user.id, user.username)
        login_counter.add(1, {"outcome": "success"})
        logger.info("login_success", username=user.username, user_id=user.id)
        return LoginResult(token=token, user=user)

    def authenticate(self, token: str | None) -> TokenClaims:
        return self.issuer.validate(token)
