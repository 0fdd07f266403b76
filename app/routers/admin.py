"""Admin: account blocking, complaint review, audit trail."""
from fastapi import APIRouter, Depends, Query
from app.dependencies import client_ip, get_current_user, get_store
from app.models.user import User
from app.schemas.complaint import ComplaintResolveRequest, ComplaintResponse
from app.schemas.user import AuditResponse, UserResponse
from app.services.complaints import ComplaintService
from app.services.users import UserService
from app.store import Store

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/users/{user_id}/block", response_model=UserResponse)
def block_user(
    user_id: int,
    store: Store = Depends(get_store),
    ip: str = Depends(client_ip),
    current_user: User = Depends(get_current_user),
):
    result = UserService(store, ip).set_blocked(current_user, user_id, blocked=True)
    store.commit()
    return result


@router.post("/users/{user_id}/unblock", response_model=UserResponse)
def unblock_user(
    user_id: int,
    store: Store = Depends(get_store),
    ip: str = Depends(client_ip),
    current_user: User = Depends(get_current_user),
):
    result = UserService(store, ip).set_blocked(current_user, user_id, blocked=False)
    store.commit()
    return result


@router.get("/users/{user_id}/audit", response_model=list[AuditResponse])
def user_audit_trail(user_id: int, store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    return UserService(store).audit_trail(current_user, user_id)


@router.get("/complaints", response_model=list[ComplaintResponse])
def list_complaints(
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
    status: str | None = Query(None, description="PENDING, RESOLVED or REJECTED"),
):
    return ComplaintService(store).list_complaints(current_user, status)


@router.post("/complaints/{complaint_id}/resolve", response_model=ComplaintResponse)
def resolve_complaint(
    complaint_id: int,
    data: ComplaintResolveRequest,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    result = ComplaintService(store).resolve(current_user, complaint_id, data.outcome)
    store.commit()
    return result
