"""User account schemas."""
import re
from datetime import datetime
from pydantic import BaseModel, EmailStr, field_validator

PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15
PASSWORD_MIN_LEN = 6


def _normalize_phone(value: str | None) -> str:
    if value is None:
        return ""
    return re.sub(r"\D", "", value.strip())


def _validate_phone_digits(phone: str) -> None:
    digits = _normalize_phone(phone)
    if not digits:
        raise ValueError("Phone number is required")
    if len(digits) < PHONE_MIN_DIGITS:
        raise ValueError(f"Phone number must have at least {PHONE_MIN_DIGITS} digits")
    if len(digits) > PHONE_MAX_DIGITS:
        raise ValueError(f"Phone number cannot exceed {PHONE_MAX_DIGITS} digits")


def _validate_password(password: str) -> None:
    if len(password or "") < PASSWORD_MIN_LEN:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LEN} characters")


class UserSignupRequest(BaseModel):
    username: str
    password: str
    email: EmailStr
    phone: str
    address: str | None = None
    role: str  # HOST, CLIENT or ADMIN; decoded by the service

    @field_validator("username")
    @classmethod
    def username_valid(cls, v: str) -> str:
        v = (v or "").strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v

    @field_validator("password")
    @classmethod
    def password_valid(cls, v: str) -> str:
        _validate_password(v)
        return v

    @field_validator("phone")
    @classmethod
    def phone_valid(cls, v: str) -> str:
        _validate_phone_digits(v or "")
        # Stored as bare digits so uniqueness ignores formatting
        return _normalize_phone(v)


class UserLoginRequest(BaseModel):
    username: str
    password: str


class UserUpdateRequest(BaseModel):
    email: EmailStr
    phone: str
    address: str | None = None

    @field_validator("phone")
    @classmethod
    def phone_valid(cls, v: str) -> str:
        _validate_phone_digits(v or "")
        # Stored as bare digits so uniqueness ignores formatting
        return _normalize_phone(v)


class ResetPasswordRequest(BaseModel):
    username: str
    old_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def password_valid(cls, v: str) -> str:
        _validate_password(v)
        return v


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    phone: str
    address: str | None = None
    role: str
    status: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    user_id: int
    username: str
    email: str
    role: str
    access_token: str
    token_type: str = "bearer"


class AuditResponse(BaseModel):
    id: int
    user_id: int
    action: str
    description: str
    ip_address: str
    timestamp: datetime

    class Config:
        from_attributes = True
