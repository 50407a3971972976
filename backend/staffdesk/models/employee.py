from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from staffdesk.db.session import Base


class Employee(Base):
    __tablename__ = "employees"
    # AUTOINCREMENT: ids of deleted rows are never reused.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    # Externally generated code, e.g. EMP-240501-093015-IA-07
    employee_id = Column(String(64), nullable=False, unique=True, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)

    position_id = Column(Integer, ForeignKey("positions.id"), nullable=True)

    address = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(32), nullable=True)
    salary = Column(Float, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    position = relationship("Position", back_populates="employees")
