import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from courseapp.auth import jwt_handler
from courseapp.auth.password import hash_password, verify_password
from courseapp.database import get_db
from courseapp.models.user import Role, User

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

VALID_ROLES = {role.value for role in Role}


class RegisterRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: str | None = None
    password: str | None = None


@router.post('/register')
def register(data: RegisterRequest | None = None, db: Session = Depends(get_db)):
    data = data or RegisterRequest()
    if not data.username or not data.password or data.role not in VALID_ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Please provide username, password, and a valid role (teacher or student)',
        )

    try:
        user = User(
            username=data.username,
            password_hash=hash_password(data.password),
            role=data.role,
        )
        db.add(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Registration failed for %r', data.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Registration failed',
        ) from exc

    logger.info('Registered %s %r', data.role, data.username)
    return {'message': 'User registered successfully'}


@router.post('/login')
def login(data: LoginRequest | None = None, db: Session = Depends(get_db)):
    data = data or LoginRequest()
    if not data.username or not data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Please provide username and password',
        )

    try:
        user = db.query(User).filter(User.username == data.username).first()
    except SQLAlchemyError as exc:
        logger.exception('Login lookup failed for %r', data.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Login failed',
        ) from exc

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='User not found')

    if not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid password')

    claims = jwt_handler.build_claims(user)
    token = jwt_handler.encode_claims(claims)
    logger.info('User %r logged in', user.username)
    return {'token': token, 'user': claims}
