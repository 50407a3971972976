from __future__ import annotations

from typing import Any

from staffdesk.core.errors import ConflictError, NotFoundError, ValidationError
from staffdesk.core.logging import get_logger
from staffdesk.core.observability import mutation_counter
from staffdesk.storage import PositionRecord

from .base import Repository, clean_text

logger = get_logger(__name__)


class PositionRepository(Repository):
    def list(self) -> list[PositionRecord]:
        return sorted(self.storage.list_positions(), key=lambda p: (p.name, p.id))

    def create(self, name: Any) -> PositionRecord:
        cleaned = clean_text(name) if isinstance(name, str) else ""
        if not cleaned:
            raise ValidationError("Position name is required")

        folded = cleaned.casefold()
        if any(p.name.casefold() == folded for p in self.storage.list_positions()):
            raise ConflictError("Position already exists")

        position = self.storage.insert_position(cleaned, created_at=self._clock())
        mutation_counter.add(1, {"entity": "position", "action": "create"})
        logger.info("position_created", id=position.id, name=position.name)
        return position

    def delete(self, position_id: int) -> None:
        in_use = self.storage.count_employees_with_position(position_id)
        if in_use:
            logger.info("position_delete_blocked", id=position_id, employees=in_use)
            raise ConflictError(
                f"Cannot delete position that is assigned to employees ({in_use} assigned)"
            )
        if not self.storage.delete_position(position_id):
            raise NotFoundError("Position not found")
        mutation_counter.add(1, {"entity": "position", "action": "delete"})
        logger.info("position_deleted", id=position_id)
