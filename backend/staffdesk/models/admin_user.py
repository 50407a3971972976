from sqlalchemy import Column, DateTime, Integer, String

from staffdesk.db.session import Base


class AdminUser(Base):
    __tablename__ = "admin_users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False)
