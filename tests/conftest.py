import pytest
from fastapi.testclient import TestClient

from courseapp.auth.jwt_handler import build_claims
from courseapp.auth.password import hash_password
from courseapp.database import Database
from courseapp.main import create_app
from courseapp.models.course import Course
from courseapp.models.user import User


@pytest.fixture
def database():
    database = Database('sqlite://')
    database.init()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(database):
    yield from database.session()


@pytest.fixture
def make_user(db):
    def _make_user(username: str, role: str, password: str = 'secret') -> User:
        user = User(username=username, password_hash=hash_password(password), role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_course(db):
    def _make_course(name: str, credits: float = 3, **fields) -> Course:
        course = Course(name=name, credits=credits, **fields)
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make_course


@pytest.fixture
def teacher_claims(make_user) -> dict:
    return build_claims(make_user('prof', 'teacher'))


@pytest.fixture
def student_claims(make_user) -> dict:
    return build_claims(make_user('alice', 'student'))


@pytest.fixture
def client(tmp_path):
    app = create_app(database_url='sqlite://', static_dir=str(tmp_path / 'no-frontend'))
    with TestClient(app) as test_client:
        yield test_client
