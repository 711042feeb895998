import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from courseapp.auth.dependencies import require_teacher
from courseapp.database import get_db
from courseapp.models.course import Course

router = APIRouter(tags=['courses'])

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('name', 'description', 'subject', 'credits')


class CourseRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    description: str | None = None
    subject: str | None = None
    credits: float | None = None


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    subject: str | None = None
    credits: float
    created_at: datetime = Field(serialization_alias='createdAt')
    updated_at: datetime = Field(serialization_alias='updatedAt')

    @field_serializer('credits')
    def serialize_credits(self, credits: float) -> int | float:
        return int(credits) if float(credits).is_integer() else credits


def store_error(message: str, exc: SQLAlchemyError) -> HTTPException:
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def course_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Course not found')


@router.get('/courses', response_model=list[CourseResponse])
def list_courses(
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Course)
        if search:
            query = query.filter(Course.name.icontains(search, autoescape=True))
        return query.order_by(Course.created_at.asc()).all()
    except SQLAlchemyError as exc:
        raise store_error('Error fetching courses', exc) from exc


@router.get('/courses/{course_id}', response_model=CourseResponse)
def get_course(course_id: str, db: Session = Depends(get_db)):
    try:
        course = db.get(Course, course_id)
    except SQLAlchemyError as exc:
        raise store_error('Error fetching course details', exc) from exc

    if course is None:
        raise course_not_found()
    return course


@router.post('/courses', response_model=CourseResponse)
def create_course(
    data: CourseRequest | None = None,
    db: Session = Depends(get_db),
    claims: dict = Depends(require_teacher),
):
    data = data or CourseRequest()
    if not data.name or not data.credits:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Course name and credits are required',
        )

    try:
        course = Course(**data.model_dump(include=set(EDITABLE_FIELDS)))
        db.add(course)
        db.commit()
        db.refresh(course)
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error('Error creating course', exc) from exc

    logger.info('Teacher %r created course %s', claims['username'], course.id)
    return course


@router.put('/courses/{course_id}', response_model=CourseResponse)
def update_course(
    course_id: str,
    data: CourseRequest,
    db: Session = Depends(get_db),
    claims: dict = Depends(require_teacher),
):
    try:
        course = db.get(Course, course_id)
        if course is None:
            raise course_not_found()

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(course, field, value)
        db.commit()
        db.refresh(course)
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error('Error updating course', exc) from exc

    logger.info('Teacher %r updated course %s', claims['username'], course_id)
    return course


@router.delete('/courses/{course_id}')
def delete_course(
    course_id: str,
    db: Session = Depends(get_db),
    claims: dict = Depends(require_teacher),
):
    try:
        course = db.get(Course, course_id)
        if course is None:
            raise course_not_found()

        db.delete(course)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error('Error deleting course', exc) from exc

    logger.info('Teacher %r deleted course %s', claims['username'], course_id)
    return {'message': 'Course deleted successfully'}
