import pytest
from fastapi import HTTPException

from courseapp.auth.jwt_handler import decode_claims
from courseapp.auth.password import verify_password
from courseapp.models.user import User
from courseapp.routes.auth_routes import LoginRequest, RegisterRequest, login, register


def test_register_stores_hashed_password(db) -> None:
    response = register(RegisterRequest(username='alice', password='secret', role='student'), db=db)

    user = db.query(User).filter(User.username == 'alice').one()
    assert response == {'message': 'User registered successfully'}
    assert user.role == 'student'
    assert user.password_hash != 'secret'
    assert verify_password('secret', user.password_hash)


@pytest.mark.parametrize(
    'payload',
    [
        {'password': 'secret', 'role': 'student'},
        {'username': 'alice', 'role': 'student'},
        {'username': 'alice', 'password': 'secret'},
        {'username': 'alice', 'password': 'secret', 'role': 'admin'},
        {'username': '', 'password': 'secret', 'role': 'teacher'},
    ],
)
def test_register_rejects_missing_or_invalid_fields(db, payload: dict) -> None:
    with pytest.raises(HTTPException) as exception_info:
        register(RegisterRequest(**payload), db=db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Please provide username, password, and a valid role (teacher or student)'
    assert db.query(User).count() == 0


def test_register_duplicate_username_surfaces_store_error(db) -> None:
    register(RegisterRequest(username='alice', password='secret', role='student'), db=db)

    with pytest.raises(HTTPException) as exception_info:
        register(RegisterRequest(username='alice', password='other', role='teacher'), db=db)

    assert exception_info.value.status_code == 500
    assert exception_info.value.detail == 'Registration failed'
    assert db.query(User).count() == 1


def test_login_returns_token_with_user_claims(db, make_user) -> None:
    user = make_user('prof', 'teacher', password='letmein')

    response = login(LoginRequest(username='prof', password='letmein'), db=db)

    expected = {'id': user.id, 'username': 'prof', 'role': 'teacher'}
    assert response['user'] == expected
    assert decode_claims(response['token']) == expected


def test_login_rejects_missing_fields(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        login(LoginRequest(username='prof'), db=db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Please provide username and password'


def test_login_returns_not_found_for_unknown_user(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        login(LoginRequest(username='ghost', password='secret'), db=db)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'User not found'


def test_login_rejects_wrong_password(db, make_user) -> None:
    make_user('prof', 'teacher', password='letmein')

    with pytest.raises(HTTPException) as exception_info:
        login(LoginRequest(username='prof', password='wrong'), db=db)

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Invalid password'


def test_register_without_body_reports_missing_fields(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        register(None, db=db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Please provide username, password, and a valid role (teacher or student)'


def test_login_without_body_reports_missing_fields(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        login(None, db=db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Please provide username and password'


def test_register_request_coerces_numeric_username() -> None:
    request = RegisterRequest(username=12345, password=67890, role='student')

    assert request.username == '12345'
    assert request.password == '67890'
