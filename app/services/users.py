"""User accounts: signup, login/logout, profile, soft delete, password reset, admin block.

Every successful mutating action appends exactly one audit record attributed to
the acting user. Checks run in a fixed order: existence, authorization, idempotency,
transition precondition, then mutation and audit.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from app.exceptions import (
    DuplicateResourceError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from app.models.audit_log import ActionType, Audit
from app.models.user import User, UserRole, UserStatus
from app.schemas.user import (
    AuditResponse,
    LoginResponse,
    ResetPasswordRequest,
    UserLoginRequest,
    UserResponse,
    UserSignupRequest,
    UserUpdateRequest,
)
from app.services import audit_log
from app.services.auth import create_access_token, get_password_hash, verify_password
from app.services.lifecycle import check_transition, decode_enum, ensure_user_deletable, utcnow
from app.store import Store

log = logging.getLogger("uvicorn.error")


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        phone=user.phone,
        address=user.address,
        role=user.role.value,
        status=user.status.value,
    )


def to_audit_response(entry: Audit) -> AuditResponse:
    return AuditResponse(
        id=entry.id,
        user_id=entry.user_id,
        action=entry.action.value,
        description=entry.description,
        ip_address=entry.ip_address,
        timestamp=entry.timestamp,
    )


class UserService:
    def __init__(self, store: Store, ip_address: str | None = None, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.ip_address = ip_address
        self.clock = clock

    def _audit(self, user_id: int, action: ActionType, description: str) -> None:
        audit_log.record(self.store.db, user_id, action, description, self.ip_address, clock=self.clock)

    def _by_username(self, username: str) -> User | None:
        return self.store.first_by(User, username=(username or "").strip())

    def add_user(self, data: UserSignupRequest, allow_admin: bool = False) -> UserResponse:
        """Register an account. ADMIN accounts only come from the seeding script (allow_admin=True)."""
        role = decode_enum(UserRole, data.role, "role")
        if role == UserRole.ADMIN and not allow_admin:
            raise UnauthorizedError("Admin accounts cannot be created through signup")
        if self.store.exists(User, username=data.username):
            raise DuplicateResourceError("Username already exists", field="username")
        if self.store.exists(User, email=data.email):
            raise DuplicateResourceError("Email already registered", field="email")
        if self.store.exists(User, phone=data.phone):
            raise DuplicateResourceError("Phone number already registered", field="phone")

        user = self.store.save(User(
            username=data.username,
            hashed_password=get_password_hash(data.password),
            email=data.email,
            phone=data.phone,
            address=data.address or None,
            role=role,
            status=UserStatus.ACTIVE,
        ))
        self._audit(user.id, ActionType.CREATE, "User registered successfully")
        return to_user_response(user)

    def login_user(self, data: UserLoginRequest) -> LoginResponse:
        user = self._by_username(data.username)
        if user is None:
            raise NotFoundError("User not found. Please register first.")
        # Credential first, then status
        if not verify_password(data.password, user.hashed_password):
            raise InvalidCredentialsError("Invalid username or password")
        if user.status == UserStatus.BLOCKED:
            raise UnauthorizedError("Your account is blocked. Contact admin.")
        if user.status == UserStatus.DELETED:
            raise NotFoundError("Account not found")

        self._audit(user.id, ActionType.LOGIN, "User logged in")
        return LoginResponse(
            user_id=user.id,
            username=user.username,
            email=user.email,
            role=user.role.value,
            access_token=create_access_token(user),
        )

    def view_profile(self, user_id: int) -> UserResponse:
        return to_user_response(self.store.get(User, user_id, "User not found"))

    def update_user(self, user_id: int, data: UserUpdateRequest) -> UserResponse:
        user = self.store.get(User, user_id, "User not found")
        if user.email != data.email and self.store.exists(User, email=data.email):
            raise DuplicateResourceError("Email already registered", field="email")
        if user.phone != data.phone and self.store.exists(User, phone=data.phone):
            raise DuplicateResourceError("Phone number already registered", field="phone")

        user.email = data.email
        user.phone = data.phone
        user.address = data.address or None
        self.store.save(user)
        self._audit(user.id, ActionType.UPDATE, "User profile updated")
        return to_user_response(user)

    def delete_user(self, user_id: int) -> None:
        user = self.store.get(User, user_id, "User not found")
        ensure_user_deletable(user)
        user.status = UserStatus.DELETED
        self.store.save(user)
        log.info("User %s soft-deleted", user.id)
        self._audit(user.id, ActionType.DELETE, "User account deleted")

    def reset_password(self, data: ResetPasswordRequest) -> None:
        user = self._by_username(data.username)
        if user is None:
            raise NotFoundError("User not found")
        if not verify_password(data.old_password, user.hashed_password):
            raise InvalidCredentialsError("Old password is incorrect")
        user.hashed_password = get_password_hash(data.new_password)
        self.store.save(user)
        self._audit(user.id, ActionType.UPDATE, "Password reset successfully")

    def logout_user(self, user_id: int) -> None:
        user = self.store.get(User, user_id, "User not found")
        self._audit(user.id, ActionType.LOGOUT, "User logged out")

    def set_blocked(self, actor: User, user_id: int, blocked: bool) -> UserResponse:
        """Admin toggle between ACTIVE and BLOCKED. Audited against the acting admin."""
        target = self.store.get(User, user_id, "User not found")
        if actor.role != UserRole.ADMIN:
            raise UnauthorizedError("Only admins can change account status")
        new_status = UserStatus.BLOCKED if blocked else UserStatus.ACTIVE
        check_transition("User", target.status, new_status)
        target.status = new_status
        self.store.save(target)
        verb = "blocked" if blocked else "unblocked"
        log.info("User %s %s by admin %s", target.id, verb, actor.id)
        self._audit(actor.id, ActionType.UPDATE, f"User {target.username} (id={target.id}) {verb} by admin")
        return to_user_response(target)

    def audit_trail(self, actor: User, user_id: int) -> list[AuditResponse]:
        self.store.get(User, user_id, "User not found")
        if actor.role != UserRole.ADMIN:
            raise UnauthorizedError("Only admins can read the audit trail")
        return [to_audit_response(a) for a in audit_log.list_for_user(self.store.db, user_id)]
