import logging
import os

from dotenv import load_dotenv


load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "MY_SECRET_KEY"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
DEBUG = _get_bool(os.getenv("DEBUG"), default=False)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./courseapp.db")
# Read only to warn: the store is addressed through DATABASE_URL.
MONGO_URI = os.getenv("MONGO_URI")

JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
JWT_ALGORITHM = "HS256"

STATIC_DIR = os.getenv("STATIC_DIR", "Frontend")
CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"))


def validate_runtime_config() -> None:
    if MONGO_URI:
        logger.warning("MONGO_URI is set but ignored; configure the store with DATABASE_URL.")

    if JWT_SECRET != DEFAULT_JWT_SECRET:
        return
    if APP_ENV.lower() == "production":
        raise RuntimeError("JWT_SECRET must be set in production.")
    logger.warning("JWT_SECRET is not set; tokens are signed with the built-in default secret.")
