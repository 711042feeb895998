import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from courseapp.auth.dependencies import require_student
from courseapp.database import get_db
from courseapp.models.course import Course
from courseapp.models.enrollment import Enrollment
from courseapp.models.user import User
from courseapp.routes.course_routes import CourseResponse, course_not_found, store_error

router = APIRouter(prefix='/students', tags=['students'])

logger = logging.getLogger(__name__)


def get_enrolled_course_ids(user_id: str, db: Session) -> list[str]:
    rows = db.query(Enrollment.course_id).filter(
        Enrollment.user_id == user_id,
    ).order_by(Enrollment.id.asc()).all()
    return [course_id for (course_id,) in rows]


def ensure_student_exists(user_id: str, db: Session, message: str) -> None:
    # Tokens never expire, so they can outlive the user they were issued for.
    if db.get(User, user_id) is None:
        logger.error('%s: token user %s no longer exists', message, user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.post('/courses/{course_id}')
def enroll_in_course(
    course_id: str,
    db: Session = Depends(get_db),
    claims: dict = Depends(require_student),
):
    user_id = claims['id']

    try:
        if db.get(Course, course_id) is None:
            raise course_not_found()
        ensure_student_exists(user_id, db, 'Error adding course')

        # The unique (user_id, course_id) constraint makes this an add-to-set.
        db.add(Enrollment(user_id=user_id, course_id=course_id))
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Already enrolled in this course',
            ) from exc

        enrolled = get_enrolled_course_ids(user_id, db)
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error('Error adding course', exc) from exc

    logger.info('Student %r enrolled in course %s', claims['username'], course_id)
    return {'message': 'Course added to schedule', 'enrolledCourses': enrolled}


@router.delete('/courses/{course_id}')
def drop_course(
    course_id: str,
    db: Session = Depends(get_db),
    claims: dict = Depends(require_student),
):
    user_id = claims['id']

    try:
        ensure_student_exists(user_id, db, 'Error removing course')

        removed = db.query(Enrollment).filter(
            Enrollment.user_id == user_id,
            Enrollment.course_id == course_id,
        ).delete(synchronize_session=False)
        db.commit()

        enrolled = get_enrolled_course_ids(user_id, db)
    except SQLAlchemyError as exc:
        db.rollback()
        raise store_error('Error removing course', exc) from exc

    if removed:
        logger.info('Student %r dropped course %s', claims['username'], course_id)
    return {'message': 'Course removed from schedule', 'enrolledCourses': enrolled}


@router.get('/courses', response_model=list[CourseResponse])
def list_enrolled_courses(
    db: Session = Depends(get_db),
    claims: dict = Depends(require_student),
):
    try:
        ensure_student_exists(claims['id'], db, 'Error fetching enrolled courses')

        return db.query(Course).join(
            Enrollment, Enrollment.course_id == Course.id,
        ).filter(
            Enrollment.user_id == claims['id'],
        ).order_by(Enrollment.id.asc()).all()
    except SQLAlchemyError as exc:
        raise store_error('Error fetching enrolled courses', exc) from exc
