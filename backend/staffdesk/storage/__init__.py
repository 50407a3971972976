from .base import Storage
from .json_file import JsonFileStorage
from .records import AdminUserRecord, EmployeeFields, EmployeeRecord, PositionRecord
from .sql import SqlStorage

__all__ = [
    "Storage",
    "SqlStorage",
    "JsonFileStorage",
    "AdminUserRecord",
    "EmployeeFields",
    "EmployeeRecord",
    "PositionRecord",
]
