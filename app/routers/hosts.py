"""Host property management, host bookings and complaints."""
from fastapi import APIRouter, Depends, Response
from app.dependencies import get_current_user, get_store
from app.models.user import User
from app.schemas.booking import BookingResponse
from app.schemas.complaint import ComplaintRequest, ComplaintResponse
from app.schemas.property import PropertyDetailResponse, PropertyRequest, PropertyResponse, PropertyUpdateRequest
from app.services.hosts import HostService
from app.store import Store

router = APIRouter(prefix="/hosts", tags=["hosts"])


@router.post("/properties", response_model=PropertyResponse, status_code=201)
def add_property(
    data: PropertyRequest,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    result = HostService(store).add_property(current_user, data)
    store.commit()
    return result


@router.get("/properties", response_model=list[PropertyResponse])
def list_my_properties(store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    """Active (non-deleted) properties of the current host."""
    return HostService(store).view_all_properties(current_user)


@router.get("/properties/deleted", response_model=list[PropertyResponse])
def list_deleted_properties(store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    return HostService(store).view_deleted_properties(current_user)


@router.get("/properties/{property_id}", response_model=PropertyDetailResponse)
def get_property(property_id: int, store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    return HostService(store).view_property(property_id)


@router.put("/properties/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    data: PropertyUpdateRequest,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    result = HostService(store).update_property(current_user, property_id, data)
    store.commit()
    return result


@router.delete("/properties/{property_id}", status_code=204)
def delete_property(property_id: int, store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    """Soft delete. Refused while the property has pending or confirmed bookings."""
    HostService(store).delete_property(current_user, property_id)
    store.commit()
    return Response(status_code=204)


@router.get("/bookings", response_model=list[BookingResponse])
def list_host_bookings(store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    return HostService(store).view_bookings(current_user)


@router.post("/complaints", response_model=ComplaintResponse, status_code=201)
def add_complaint(
    data: ComplaintRequest,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    result = HostService(store).add_complaint(current_user, data)
    store.commit()
    return result
