from .admin_users import AdminUserRepository
from .employees import EmployeeRepository
from .positions import PositionRepository

__all__ = ["AdminUserRepository", "EmployeeRepository", "PositionRepository"]
