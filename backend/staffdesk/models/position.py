from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from staffdesk.db.session import Base


class Position(Base):
    __tablename__ = "positions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False)

    employees = relationship("Employee", back_populates="position")
