from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from sqlalchemy import func, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from staffdesk.core.errors import ConflictError, InternalError
from staffdesk.core.logging import get_logger
from staffdesk.models import AdminUser, Employee, Position

from .base import Storage
from .records import AdminUserRecord, EmployeeFields, EmployeeRecord, PositionRecord

logger = get_logger(__name__)


def dialect_label(dialect: str) -> str:
    return "SQLite" if dialect == "sqlite" else dialect


def _position_record(row: Position) -> PositionRecord:
    return PositionRecord(id=row.id, name=row.name, created_at=row.created_at)


def _employee_record(row: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=row.id,
        employee_id=row.employee_id,
        first_name=row.first_name,
        last_name=row.last_name,
        middle_name=row.middle_name,
        position_id=row.position_id,
        address=row.address,
        contact_email=row.contact_email,
        contact_phone=row.contact_phone,
        salary=row.salary,
        created_at=row.created_at,
        updated_at=row.updated_at,
        position_name=row.position.name if row.position is not None else None,
    )


def _admin_record(row: AdminUser) -> AdminUserRecord:
    return AdminUserRecord(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlStorage(Storage):
    """Storage over a SQLAlchemy session; each mutation commits on its own."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @property
    def name(self) -> str:
        return dialect_label(self.db.get_bind().dialect.name)

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("storage_integrity_error", error=str(exc.orig))
            raise ConflictError("Record conflicts with existing data") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise InternalError() from exc

    def ping(self) -> None:
        with self._guard():
            self.db.execute(text("SELECT 1"))

    def _employees(self):
        return self.db.query(Employee).options(joinedload(Employee.position))

    def list_positions(self) -> list[PositionRecord]:
        with self._guard():
            return [_position_record(row) for row in self.db.query(Position).all()]

    def get_position(self, position_id: int) -> Optional[PositionRecord]:
        with self._guard():
            row = self.db.get(Position, position_id)
            return _position_record(row) if row else None

    def insert_position(self, name: str, created_at: datetime) -> PositionRecord:
        with self._guard():
            row = Position(name=name, created_at=created_at)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return _position_record(row)

    def delete_position(self, position_id: int) -> bool:
        with self._guard():
            row = self.db.get(Position, position_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
            return True

    def count_employees_with_position(self, position_id: int) -> int:
        with self._guard():
            return (
                self.db.query(func.count(Employee.id))
                .filter(Employee.position_id == position_id)
                .scalar()
            )

    def list_employees(self) -> list[EmployeeRecord]:
        with self._guard():
            return [_employee_record(row) for row in self._employees().all()]

    def get_employee(self, record_id: int) -> Optional[EmployeeRecord]:
        with self._guard():
            row = self._employees().filter(Employee.id == record_id).one_or_none()
            return _employee_record(row) if row else None

    def find_employee_by_code(self, employee_id: str) -> Optional[EmployeeRecord]:
        with self._guard():
            row = self._employees().filter(Employee.employee_id == employee_id).one_or_none()
            return _employee_record(row) if row else None

    def insert_employee(self, fields: EmployeeFields, created_at: datetime) -> EmployeeRecord:
        with self._guard():
            row = Employee(**vars(fields), created_at=created_at, updated_at=created_at)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return _employee_record(row)

    def update_employee(
        self, record_id: int, fields: EmployeeFields, updated_at: datetime
    ) -> Optional[EmployeeRecord]:
        with self._guard():
            row = self.db.get(Employee, record_id)
            if row is None:
                return None
            for key, value in vars(fields).items():
                setattr(row, key, value)
            row.updated_at = updated_at
            self.db.commit()
            self.db.refresh(row)
            return _employee_record(row)

    def delete_employee(self, record_id: int) -> bool:
        with self._guard():
            row = self.db.get(Employee, record_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
            return True

    def list_admin_users(self) -> list[AdminUserRecord]:
        with self._guard():
            return [_admin_record(row) for row in self.db.query(AdminUser).all()]

    def get_admin_user(self, user_id: int) -> Optional[AdminUserRecord]:
        with self._guard():
            row = self.db.get(AdminUser, user_id)
            return _admin_record(row) if row else None

    def find_admin_user(self, username: str) -> Optional[AdminUserRecord]:
        with self._guard():
            row = self.db.query(AdminUser).filter(AdminUser.username == username).one_or_none()
            return _admin_record(row) if row else None

    def insert_admin_user(self, username: str, password_hash: str, created_at: datetime) -> AdminUserRecord:
        with self._guard():
            row = AdminUser(username=username, password_hash=password_hash, created_at=created_at)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return _admin_record(row)

    def delete_admin_user(self, user_id: int) -> bool:
        with self._guard():
            row = self.db.get(AdminUser, user_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
            return True
