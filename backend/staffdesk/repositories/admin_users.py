from __future__ import annotations

from typing import Any, Optional

from staffdesk.core.errors import ConflictError, NotFoundError, ValidationError
from staffdesk.core.logging import get_logger
from staffdesk.core.observability import mutation_counter
from staffdesk.core.security import hash_password
from staffdesk.storage import AdminUserRecord

from .base import Repository, clean_text

logger = get_logger(__name__)

PRIMARY_ADMIN_ID = 1
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 4


def check_credentials_shape(username: Any, password: Any) -> str:
    """Return the trimmed username, or raise if either value is too short."""
    cleaned = clean_text(username) if isinstance(username, str) else ""
    if not cleaned or not isinstance(password, str) or not password:
        raise ValidationError("Username and password are required")
    if len(cleaned) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    return cleaned


class AdminUserRepository(Repository):
    def list(self) -> list[AdminUserRecord]:
        return sorted(self.storage.list_admin_users(), key=lambda u: (u.username, u.id))

    def get_by_username(self, username: str) -> Optional[AdminUserRecord]:
        return self.storage.find_admin_user(username)

    def create(self, username: Any, password: Any, actor: Optional[str] = None) -> AdminUserRecord:
        cleaned = check_credentials_shape(username, password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if actor is not None and actor == cleaned:
            raise ValidationError("Cannot modify your own account")
        if self.storage.find_admin_user(cleaned) is not None:
            raise ConflictError("Username already exists")

        user = self.storage.insert_admin_user(cleaned, hash_password(password), created_at=self._clock())
        mutation_counter.add(1, {"entity": "admin_user", "action": "create"})
        logger.info("admin_user_created", id=user.id, username=user.username, actor=actor)
        return user

    def delete(self, user_id: int, actor_id: Optional[int] = None) -> None:
        if actor_id is not None and user_id == actor_id:
            raise ValidationError("Cannot delete your own account")
        if user_id == PRIMARY_ADMIN_ID:
            raise ValidationError("Cannot delete the primary admin account")
        if not self.storage.delete_admin_user(user_id):
            raise NotFoundError("Admin user not found")
        mutation_counter.add(1, {"entity": "admin_user", "action": "delete"})
        logger.info("admin_user_deleted", id=user_id, actor_id=actor_id)
