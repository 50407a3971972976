from .admin_user import AdminUser
from .employee import Employee
from .position import Position

__all__ = ["AdminUser", "Employee", "Position"]
