"""Course model definitions."""

from sqlalchemy import Column, DateTime, Float, String
from sqlalchemy.orm import relationship

from courseapp.database import Base
from courseapp.models.common import generate_id, utcnow
from courseapp.models.enrollment import Enrollment


class Course(Base):
    """Represents a course offered by a teacher."""
    __tablename__ = "courses"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    description = Column(String)
    subject = Column(String)
    credits = Column(Float, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    enrollments = relationship(Enrollment, cascade="all, delete-orphan")
