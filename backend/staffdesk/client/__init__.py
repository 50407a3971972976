from .api import StaffDeskClient
from .ids import generate_employee_id, generate_simple_employee_id, is_employee_id_unique
from .session import ClientSession, TokenStore
from .validators import is_valid_name, is_valid_phone

__all__ = [
    "StaffDeskClient",
    "ClientSession",
    "TokenStore",
    "generate_employee_id",
    "generate_simple_employee_id",
    "is_employee_id_unique",
    "is_valid_name",
    "is_valid_phone",
]
