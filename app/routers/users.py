"""User accounts: signup, login/logout, profile, delete, password reset."""
from fastapi import APIRouter, Depends, Response
from app.dependencies import client_ip, get_current_user, get_store
from app.models.user import User
from app.schemas.user import (
    LoginResponse,
    ResetPasswordRequest,
    UserLoginRequest,
    UserResponse,
    UserSignupRequest,
    UserUpdateRequest,
)
from app.services.users import UserService
from app.store import Store

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", response_model=UserResponse, status_code=201)
def signup(data: UserSignupRequest, store: Store = Depends(get_store), ip: str = Depends(client_ip)):
    result = UserService(store, ip).add_user(data)
    store.commit()
    return result


@router.post("/login", response_model=LoginResponse)
def login(data: UserLoginRequest, store: Store = Depends(get_store), ip: str = Depends(client_ip)):
    result = UserService(store, ip).login_user(data)
    store.commit()
    return result


@router.post("/logout", status_code=204)
def logout(
    store: Store = Depends(get_store),
    ip: str = Depends(client_ip),
    current_user: User = Depends(get_current_user),
):
    UserService(store, ip).logout_user(current_user.id)
    store.commit()
    return Response(status_code=204)


@router.get("/me", response_model=UserResponse)
def view_profile(store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    return UserService(store).view_profile(current_user.id)


@router.put("/me", response_model=UserResponse)
def update_profile(
    data: UserUpdateRequest,
    store: Store = Depends(get_store),
    ip: str = Depends(client_ip),
    current_user: User = Depends(get_current_user),
):
    result = UserService(store, ip).update_user(current_user.id, data)
    store.commit()
    return result


@router.delete("/me", status_code=204)
def delete_account(
    store: Store = Depends(get_store),
    ip: str = Depends(client_ip),
    current_user: User = Depends(get_current_user),
):
    UserService(store, ip).delete_user(current_user.id)
    store.commit()
    return Response(status_code=204)


@router.post("/reset-password", status_code=204)
def reset_password(data: ResetPasswordRequest, store: Store = Depends(get_store), ip: str = Depends(client_ip)):
    UserService(store, ip).reset_password(data)
    store.commit()
    return Response(status_code=204)
