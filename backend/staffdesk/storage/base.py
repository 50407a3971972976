from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from .records import AdminUserRecord, EmployeeFields, EmployeeRecord, PositionRecord


class Storage(ABC):
    """Persistence primitives behind the repositories.

    Adapters only store and fetch. Uniqueness, referential checks, trimming
    and timestamps are decided by the repositories, so every adapter gets
    the same behaviour. Adapters raise ``InternalError`` when the backing
    store fails.
    """

    name: str = "storage"

    @abstractmethod
    def ping(self) -> None:
        """Raise if the backing store is unreachable."""

    # Positions
    @abstractmethod
    def list_positions(self) -> list[PositionRecord]: ...

    @abstractmethod
    def get_position(self, position_id: int) -> Optional[PositionRecord]: ...

    @abstractmethod
    def insert_position(self, name: str, created_at: datetime) -> PositionRecord: ...

    @abstractmethod
    def delete_position(self, position_id: int) -> bool: ...

    @abstractmethod
    def count_employees_with_position(self, position_id: int) -> int: ...

    # Employees
    @abstractmethod
    def list_employees(self) -> list[EmployeeRecord]:
        """All employees with ``position_name`` filled where the position exists."""

    @abstractmethod
    def get_employee(self, record_id: int) -> Optional[EmployeeRecord]: ...

    @abstractmethod
    def find_employee_by_code(self, employee_id: str) -> Optional[EmployeeRecord]: ...

    @abstractmethod
    def insert_employee(self, fields: EmployeeFields, created_at: datetime) -> EmployeeRecord: ...

    @abstractmethod
    def update_employee(
        self, record_id: int, fields: EmployeeFields, updated_at: datetime
    ) -> Optional[EmployeeRecord]: ...

    @abstractmethod
    def delete_employee(self, record_id: int) -> bool: ...

    # Admin users
    @abstractmethod
    def list_admin_users(self) -> list[AdminUserRecord]: ...

    @abstractmethod
    def get_admin_user(self, user_id: int) -> Optional[AdminUserRecord]: ...

    @abstractmethod
    def find_admin_user(self, username: str) -> Optional[AdminUserRecord]: ...

    @abstractmethod
    def insert_admin_user(self, username: str, password_hash: str, created_at: datetime) -> AdminUserRecord: ...

    @abstractmethod
    def delete_admin_user(self, user_id: int) -> bool: ...
