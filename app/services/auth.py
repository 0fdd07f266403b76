"""Credentials: bcrypt password hashes and HS256 access tokens."""
from datetime import datetime, timedelta, timezone
import logging

import bcrypt
import jwt

from app.config import get_settings
from app.models.user import User

log = logging.getLogger("uvicorn.error")


def _pwd_bytes(password: str, max_len: int = 72) -> bytes:
    return password.encode("utf-8")[:max_len]


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_pwd_bytes(password), bcrypt.gensalt()).decode("utf-8")


def create_access_token(user: User) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    # PyJWT expects "sub" to be a string
    payload = {"sub": str(user.id), "username": user.username, "role": user.role.value, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def read_user_id(token: str | None) -> int | None:
    """User id from a bearer token, or None when the token is missing, expired or forged."""
    token = (token or "").strip()
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        log.debug("Rejected access token: %s", e)
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
