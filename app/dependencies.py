"""Shared dependencies: DB session, store, current user, client IP.

Role checks live in the services so they run after the existence lookup.
"""
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.user import User, UserStatus
from app.services.auth import read_user_id
from app.services.request_context import get_client_ip
from app.store import Store

security = HTTPBearer(auto_error=False)


def get_store(db: Session = Depends(get_db)) -> Store:
    return Store(db)


def client_ip(request: Request) -> str:
    return get_client_ip(request)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")
    user_id = read_user_id(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user = db.get(User, user_id)
    if not user or user.status == UserStatus.DELETED:
        raise HTTPException(status_code=401, detail="User not found")
    if user.status == UserStatus.BLOCKED:
        raise HTTPException(status_code=403, detail="Your account is blocked. Contact admin.")
    return user

