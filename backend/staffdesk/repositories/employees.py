from __future__ import annotations

import math
from datetime import timedelta
from typing import Any, Mapping, Optional

from staffdesk.core.errors import ConflictError, NotFoundError, ValidationError
from staffdesk.core.logging import get_logger
from staffdesk.core.observability import mutation_counter
from staffdesk.storage import EmployeeFields, EmployeeRecord

from .base import Repository, clean_optional, clean_text

logger = get_logger(__name__)

TIMESTAMP_STEP = timedelta(microseconds=1)


def _parse_salary(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError("Salary must be a number")
    try:
        salary = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Salary must be a number") from exc
    if math.isnan(salary) or math.isinf(salary):
        raise ValidationError("Salary must be a number")
    if salary < 0:
        raise ValidationError("Salary cannot be negative")
    return salary


def _parse_position_id(value: Any) -> Optional[int]:
    if value in (None, "", 0):
        return None
    if isinstance(value, bool):
        raise ValidationError("Position ID must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Position ID must be an integer") from exc


class EmployeeRepository(Repository):
    def _normalize(self, data: Mapping[str, Any]) -> EmployeeFields:
        raw_code = data.get("employee_id")
        if raw_code is not None and not isinstance(raw_code, str):
            raise ValidationError("Employee ID must be a non-empty string")

        fields = EmployeeFields(
            employee_id=clean_text(raw_code),
            first_name=clean_text(data.get("first_name")),
            last_name=clean_text(data.get("last_name")),
            middle_name=clean_optional(data.get("middle_name")),
            position_id=_parse_position_id(data.get("position_id")),
            address=clean_optional(data.get("address")),
            contact_email=clean_optional(data.get("contact_email")),
            contact_phone=clean_optional(data.get("contact_phone")),
            salary=_parse_salary(data.get("salary")),
        )
        if not (fields.employee_id and fields.first_name and fields.last_name):
            raise ValidationError("Employee ID, first name and last name are required")
        if fields.position_id is not None and self.storage.get_position(fields.position_id) is None:
            raise ValidationError("Position not found")
        return fields

    def _ensure_unique_code(self, employee_id: str, exclude_id: Optional[int] = None) -> None:
        existing = self.storage.find_employee_by_code(employee_id)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError("Employee ID already exists")

    def list(self) -> list[EmployeeRecord]:
        """Employees ordered by last name, then first name."""
        employees = self.storage.list_employees()
        return sorted(employees, key=lambda e: (e.last_name, e.first_name, e.id))

    def get(self, record_id: int) -> EmployeeRecord:
        employee = self.storage.get_employee(record_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee

    def create(self, data: Mapping[str, Any]) -> EmployeeRecord:
        fields = self._normalize(data)
        self._ensure_unique_code(fields.employee_id)

        employee = self.storage.insert_employee(fields, created_at=self._clock())
        mutation_counter.add(1, {"entity": "employee", "action": "create"})
        logger.info("employee_created", id=employee.id, employee_id=employee.employee_id)
        return employee

    def update(self, record_id: int, data: Mapping[str, Any]) -> EmployeeRecord:
        existing = self.get(record_id)
        fields = self._normalize(data)
        self._ensure_unique_code(fields.employee_id, exclude_id=record_id)

        # Clock resolution can repeat a timestamp; updated_at must still move forward.
        updated_at = max(self._clock(), existing.updated_at + TIMESTAMP_STEP)
        employee = self.storage.update_employee(record_id, fields, updated_at=updated_at)
        if employee is None:
            raise NotFoundError("Employee not found")
        mutation_counter.add(1, {"entity": "employee", "action": "update"})
        logger.info("employee_updated", id=employee.id, employee_id=employee.employee_id)
        return employee

    def delete(self, record_id: int) -> None:
        if not self.storage.delete_employee(record_id):
            raise NotFoundError("Employee not found")
        mutation_counter.add(1, {"entity": "employee", "action": "delete"})
        logger.info("employee_deleted", id=record_id)
