"""Client bookings and booking status changes."""
from fastapi import APIRouter, Depends
from app.dependencies import get_current_user, get_store
from app.models.user import User
from app.schemas.booking import BookingRequest, BookingResponse, RatingRequest
from app.schemas.complaint import ComplaintResponse
from app.services.bookings import BookingService
from app.services.complaints import ComplaintService
from app.store import Store

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=201)
def create_booking(data: BookingRequest, store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    result = BookingService(store).create_booking(current_user, data)
    store.commit()
    return result


@router.get("", response_model=list[BookingResponse])
def list_my_bookings(store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    return BookingService(store).list_my_bookings(current_user)


@router.get("/complaints", response_model=list[ComplaintResponse])
def list_my_complaints(store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    return ComplaintService(store).list_my_complaints(current_user)


@router.post("/{booking_id}/confirm", response_model=BookingResponse)
def confirm_booking(booking_id: int, store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    result = BookingService(store).confirm_booking(current_user, booking_id)
    store.commit()
    return result


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(booking_id: int, store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    result = BookingService(store).cancel_booking(current_user, booking_id)
    store.commit()
    return result


@router.post("/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(booking_id: int, store: Store = Depends(get_store), current_user: User = Depends(get_current_user)):
    result = BookingService(store).complete_booking(current_user, booking_id)
    store.commit()
    return result


@router.post("/{booking_id}/rate", response_model=BookingResponse)
def rate_booking(
    booking_id: int,
    data: RatingRequest,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    result = BookingService(store).rate_booking(current_user, booking_id, data.rating)
    store.commit()
    return result
