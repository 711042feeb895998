"""User model definitions."""

import enum

from sqlalchemy import CheckConstraint, Column, DateTime, String

from courseapp.database import Base
from courseapp.models.common import generate_id, utcnow


class Role(str, enum.Enum):
    TEACHER = "teacher"
    STUDENT = "student"


class User(Base):
    """Represents a registered teacher or student."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('teacher', 'student')", name="ck_users_role"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
