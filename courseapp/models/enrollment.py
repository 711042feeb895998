"""Enrollment model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from courseapp.database import Base
from courseapp.models.common import utcnow


class Enrollment(Base):
    """Links a student to a course; row order is the student's schedule order."""
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(32), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
