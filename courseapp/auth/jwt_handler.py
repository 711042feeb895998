import jwt

from courseapp.core import config

CLAIM_KEYS = ("id", "username", "role")


def build_claims(user) -> dict:
    return {"id": user.id, "username": user.username, "role": user.role}


def encode_claims(claims: dict) -> str:
    # Tokens carry no "exp"; they stay valid until the secret changes.
    payload = {key: claims[key] for key in CLAIM_KEYS}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_claims(token: str) -> dict:
    return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
