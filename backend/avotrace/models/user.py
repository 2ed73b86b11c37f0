from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from avotrace.core.database import Base


class UserRole(str, Enum):
    ADMIN = "admin"
    OPERATOR = "operator"
    CLIENT = "client"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.OPERATOR.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
