"""Client bookings and their status transitions.

PENDING -> CONFIRMED -> COMPLETED, with CANCELLED reachable from both active
states. Only the booking's client and the property's host may act on it.
"""
from __future__ import annotations

import logging

from app.exceptions import InvalidOperationError, UnauthorizedError
from app.models.booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from app.models.property import Property, PropertyStatus
from app.models.user import User, UserRole, UserStatus
from app.schemas.booking import BookingRequest, BookingResponse
from app.services.hosts import to_booking_response
from app.services.lifecycle import check_transition
from app.store import Store

log = logging.getLogger("uvicorn.error")


class BookingService:
    def __init__(self, store: Store):
        self.store = store

    def _transition(self, booking: Booking, target: BookingStatus) -> BookingResponse:
        check_transition("Booking", booking.status, target)
        previous = booking.status
        booking.status = target
        self.store.save(booking)
        log.info("Booking %s %s -> %s", booking.id, previous.value, target.value)
        return to_booking_response(booking)

    def _require_host_of(self, actor: User, booking: Booking) -> None:
        if booking.property.user_id != actor.id:
            raise UnauthorizedError("Only the property's host can do this")

    def create_booking(self, actor: User, data: BookingRequest) -> BookingResponse:
        prop = self.store.get(Property, data.property_id, "Property not found")
        if actor.role != UserRole.CLIENT or actor.status != UserStatus.ACTIVE:
            raise UnauthorizedError("Only active clients can book properties")
        if prop.status != PropertyStatus.AVAILABLE:
            raise InvalidOperationError("Property is not available for booking")

        overlapping = self.store.find_by(
            Booking,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
            Booking.checkin_date < data.checkout_date,
            Booking.checkout_date > data.checkin_date,
            property_id=prop.id,
        )
        if overlapping:
            raise InvalidOperationError("Property is already booked for these dates")

        booking = Booking(
            property_id=prop.id,
            user_id=actor.id,
            checkin_date=data.checkin_date,
            checkout_date=data.checkout_date,
            status=BookingStatus.PENDING,
            is_paid=False,
            has_extra_cot=data.has_extra_cot,
            has_deep_clean=data.has_deep_clean,
        )
        booking.property = prop
        booking.user = actor
        self.store.save(booking)
        return to_booking_response(booking)

    def list_my_bookings(self, actor: User) -> list[BookingResponse]:
        return [to_booking_response(b) for b in self.store.find_by(Booking, user_id=actor.id)]

    def confirm_booking(self, actor: User, booking_id: int) -> BookingResponse:
        booking = self.store.get(Booking, booking_id, "Booking not found")
        self._require_host_of(actor, booking)
        return self._transition(booking, BookingStatus.CONFIRMED)

    def cancel_booking(self, actor: User, booking_id: int) -> BookingResponse:
        booking = self.store.get(Booking, booking_id, "Booking not found")
        if booking.user_id != actor.id and booking.property.user_id != actor.id:
            raise UnauthorizedError("Only the guest or the host can cancel this booking")
        return self._transition(booking, BookingStatus.CANCELLED)

    def complete_booking(self, actor: User, booking_id: int) -> BookingResponse:
        booking = self.store.get(Booking, booking_id, "Booking not found")
        self._require_host_of(actor, booking)
        return self._transition(booking, BookingStatus.COMPLETED)

    def rate_booking(self, actor: User, booking_id: int, rating: int) -> BookingResponse:
        booking = self.store.get(Booking, booking_id, "Booking not found")
        if booking.user_id != actor.id:
            raise UnauthorizedError("Only the guest can rate this booking")
        if booking.is_rated:
            raise InvalidOperationError("Booking is already rated")
        if booking.status != BookingStatus.COMPLETED:
            raise InvalidOperationError("Only completed bookings can be rated")

        prop = booking.property
        total = prop.rate * prop.rating_count + rating
        prop.rating_count += 1
        # Unrounded mean; responses round to 2 decimals
        prop.rate = total / prop.rating_count
        booking.is_rated = True
        self.store.save(prop)
        self.store.save(booking)
        return to_booking_response(booking)
