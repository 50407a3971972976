from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class PositionRecord:
    id: int
    name: str
    created_at: datetime


@dataclass
class EmployeeFields:
    """Writable employee columns, already normalized by the repository."""

    employee_id: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    position_id: Optional[int] = None
    address: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    salary: Optional[float] = None


@dataclass
class EmployeeRecord:
    id: int
    employee_id: str
    first_name: str
    last_name: str
    middle_name: Optional[str]
    position_id: Optional[int]
    address: Optional[str]
    contact_email: Optional[str]
    contact_phone: Optional[str]
    salary: Optional[float]
    created_at: datetime
    updated_at: datetime
    position_name: Optional[str] = None


@dataclass
class AdminUserRecord:
    id: int
    username: str
    password_hash: str
    created_at: datetime
