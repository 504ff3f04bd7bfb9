"""SQLAlchemy models for user accounts."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)

from .session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    phone_number = Column(String(20), unique=True, index=True, nullable=False)
    full_name = Column(String(60), nullable=False)
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class UserLogin(Base):
    __tablename__ = "user_logins"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    num_of_successful_login = Column(Integer, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
