from typing import Callable

import jwt
from fastapi import Depends, Header, HTTPException, Request, status

from courseapp.auth import jwt_handler
from courseapp.auth.jwt_handler import CLAIM_KEYS
from courseapp.models.user import Role

ROLE_DENIED_MESSAGES = {
    Role.TEACHER: "Action allowed for teachers only",
    Role.STUDENT: "Action allowed for students only",
}


def require_auth(
    request: Request,
    x_auth_token: str | None = Header(default=None),
) -> dict:
    if not x_auth_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")

    try:
        claims = jwt_handler.decode_claims(x_auth_token)
    except jwt.InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    if any(key not in claims for key in CLAIM_KEYS):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    request.state.claims = claims
    return claims


def check_role(claims: dict, role: Role) -> dict:
    if claims.get("role") != role.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ROLE_DENIED_MESSAGES[role])
    return claims


def require_role(role: Role) -> Callable[..., dict]:
    def guard(claims: dict = Depends(require_auth)) -> dict:
        return check_role(claims, role)

    guard.__name__ = f"require_{role.value}"
    return guard


require_teacher = require_role(Role.TEACHER)
require_student = require_role(Role.STUDENT)
