from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from staffdesk.api.deps import get_current_user, get_employee_repository
from staffdesk.core.security import TokenClaims
from staffdesk.repositories import EmployeeRepository
from staffdesk.storage import EmployeeRecord

router = APIRouter(prefix="/employees", tags=["employees"])


class EmployeePayload(BaseModel):
    # Left lenient so the repository reports missing fields in one message.
    employee_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    position_id: int | None = None
    address: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    salary: float | None = None


class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: str
    first_name: str
    last_name: str
    middle_name: str | None = None
    position_id: int | None = None
    position_name: str | None = None
    address: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    salary: float | None = None
    created_at: datetime
    updated_at: datetime


def _to_out(record: EmployeeRecord) -> EmployeeOut:
    return EmployeeOut.model_validate(record)


@router.get("", response_model=list[EmployeeOut])
def list_employees(employees: EmployeeRepository = Depends(get_employee_repository)):
    return [_to_out(r) for r in employees.list()]


@router.get("/{record_id}", response_model=EmployeeOut)
def get_employee(record_id: int, employees: EmployeeRepository = Depends(get_employee_repository)):
    return _to_out(employees.get(record_id))


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(
    payload: EmployeePayload,
    employees: EmployeeRepository = Depends(get_employee_repository),
    _: TokenClaims = Depends(get_current_user),
):
    return _to_out(employees.create(payload.model_dump()))


@router.put("/{record_id}", response_model=EmployeeOut)
def update_employee(
    record_id: int,
    payload: EmployeePayload,
    employees: EmployeeRepository = Depends(get_employee_repository),
    _: TokenClaims = Depends(get_current_user),
):
    return _to_out(employees.update(record_id, payload.model_dump()))


@router.delete("/{record_id}", status_code=204)
def delete_employee(
    record_id: int,
    employees: EmployeeRepository = Depends(get_employee_repository),
    _: TokenClaims = Depends(get_current_user),
):
    employees.delete(record_id)
    return None
