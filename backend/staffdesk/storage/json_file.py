from __future__ import annotations

import json
import os
from dataclasses import asdict, replace
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from staffdesk.core.errors import InternalError

from .base import Storage
from .records import AdminUserRecord, EmployeeFields, EmployeeRecord, PositionRecord


class JsonFileStorage(Storage):
    """Storage kept in a single JSON document on disk.

    The whole document is read when the handle is opened and rewritten after
    every mutation, which assumes a single writer.
    """

    name = "JSON"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.positions: Dict[int, PositionRecord] = {}
        self.employees: Dict[int, EmployeeRecord] = {}
        self.admin_users: Dict[int, AdminUserRecord] = {}
        # Last id handed out per table, like sqlite_sequence.
        self.sequences: Dict[str, int] = {}
        if self.path.exists():
            self.load()

    def load(self) -> None:
        try:
            content = json.loads(self.path.read_text(encoding="utf-8"))
            self.positions = {p["id"]: self._deserialize_position(p) for p in content.get("positions", [])}
            self.employees = {e["id"]: self._deserialize_employee(e) for e in content.get("employees", [])}
            self.admin_users = {u["id"]: self._deserialize_admin(u) for u in content.get("admin_users", [])}
            self.sequences = {table: int(last) for table, last in content.get("sequences", {}).items()}
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise InternalError() from exc

    def save(self) -> None:
        payload = {
            "positions": [asdict(p) for p in self.positions.values()],
            "employees": [self._serialize_employee(e) for e in self.employees.values()],
            "admin_users": [asdict(u) for u in self.admin_users.values()],
            "sequences": self.sequences,
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(payload, default=self._date_serializer, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise InternalError() from exc

    def ping(self) -> None:
        if self.path.exists() and not os.access(self.path, os.R_OK | os.W_OK):
            raise InternalError(f"Store {self.path} is not readable and writable")

    def _next_id(self, table: str, items: Dict[int, object]) -> int:
        # Documents written before sequences existed fall back to the highest id.
        next_id = max(self.sequences.get(table, 0), max(items, default=0)) + 1
        self.sequences[table] = next_id
        return next_id

    def _with_position_name(self, employee: EmployeeRecord) -> EmployeeRecord:
        position = self.positions.get(employee.position_id) if employee.position_id is not None else None
        return replace(employee, position_name=position.name if position else None)

    def list_positions(self) -> List[PositionRecord]:
        return list(self.positions.values())

    def get_position(self, position_id: int) -> Optional[PositionRecord]:
        return self.positions.get(position_id)

    def insert_position(self, name: str, created_at: datetime) -> PositionRecord:
        record = PositionRecord(id=self._next_id("positions", self.positions), name=name, created_at=created_at)
        self.positions[record.id] = record
        self.save()
        return record

    def delete_position(self, position_id: int) -> bool:
        if self.positions.pop(position_id, None) is None:
            return False
        self.save()
        return True

    def count_employees_with_position(self, position_id: int) -> int:
        return sum(1 for e in self.employees.values() if e.position_id == position_id)

    def list_employees(self) -> List[EmployeeRecord]:
        return [self._with_position_name(e) for e in self.employees.values()]

    def get_employee(self, record_id: int) -> Optional[EmployeeRecord]:
        employee = self.employees.get(record_id)
        return self._with_position_name(employee) if employee else None

    def find_employee_by_code(self, employee_id: str) -> Optional[EmployeeRecord]:
        for employee in self.employees.values():
            if employee.employee_id == employee_id:
                return self._with_position_name(employee)
        return None

    def insert_employee(self, fields: EmployeeFields, created_at: datetime) -> EmployeeRecord:
        record = EmployeeRecord(
            id=self._next_id("employees", self.employees),
            created_at=created_at,
            updated_at=created_at,
            **asdict(fields),
        )
        self.employees[record.id] = record
        self.save()
        return self._with_position_name(record)

    def update_employee(
        self, record_id: int, fields: EmployeeFields, updated_at: datetime
    ) -> Optional[EmployeeRecord]:
        existing = self.employees.get(record_id)
        if existing is None:
            return None
        record = replace(existing, updated_at=updated_at, **asdict(fields))
        self.employees[record_id] = record
        self.save()
        return self._with_position_name(record)

    def delete_employee(self, record_id: int) -> bool:
        if self.employees.pop(record_id, None) is None:
            return False
        self.save()
        return True

    def list_admin_users(self) -> List[AdminUserRecord]:
        return list(self.admin_users.values())

    def get_admin_user(self, user_id: int) -> Optional[AdminUserRecord]:
        return self.admin_users.get(user_id)

    def find_admin_user(self, username: str) -> Optional[AdminUserRecord]:
        for user in self.admin_users.values():
            if user.username == username:
                return user
        return None

    def insert_admin_user(self, username: str, password_hash: str, created_at: datetime) -> AdminUserRecord:
        record = AdminUserRecord(
            id=self._next_id("admin_users", self.admin_users),
            username=username,
            password_hash=password_hash,
            created_at=created_at,
        )
        self.admin_users[record.id] = record
        self.save()
        return record

    def delete_admin_user(self, user_id: int) -> bool:
        if self.admin_users.pop(user_id, None) is None:
            return False
        self.save()
        return True

    @staticmethod
    def _date_serializer(value):
        if isinstance(value, datetime):
            return value.isoformat()
        raise TypeError(f"Type {type(value)} not serializable")

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        return datetime.fromisoformat(value)

    def _serialize_employee(self, employee: EmployeeRecord) -> dict:
        payload = asdict(employee)
        # Derived from positions on read.
        payload.pop("position_name", None)
        return payload

    def _deserialize_position(self, data: dict) -> PositionRecord:
        data["created_at"] = self._parse_datetime(data["created_at"])
        return PositionRecord(**data)

    def _deserialize_employee(self, data: dict) -> EmployeeRecord:
        data.pop("position_name", None)
        data["created_at"] = self._parse_datetime(data["created_at"])
        data["updated_at"] = self._parse_datetime(data["updated_at"])
        return EmployeeRecord(**data)

    def _deserialize_admin(self, data: dict) -> AdminUserRecord:
        data["created_at"] = self._parse_datetime(data["created_at"])
        return AdminUserRecord(**data)
