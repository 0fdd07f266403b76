"""Host operations: properties (with their address), host bookings, complaints."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from app.exceptions import InvalidOperationError, UnauthorizedError
from app.models.booking import Booking
from app.models.complaint import Complaint, ComplaintStatus, ComplaintType
from app.models.property import Address, Property, PropertyStatus
from app.models.user import User, UserRole
from app.schemas.booking import BookingResponse
from app.schemas.complaint import ComplaintRequest, ComplaintResponse
from app.schemas.property import (
    PropertyDetailResponse,
    PropertyRequest,
    PropertyResponse,
    PropertyUpdateRequest,
)
from app.services.lifecycle import check_transition, decode_enum, ensure_property_deletable, utcnow
from app.store import Store

log = logging.getLogger("uvicorn.error")


def to_property_response(prop: Property) -> PropertyResponse:
    address = prop.address
    return PropertyResponse(
        property_id=prop.id,
        property_name=prop.name,
        property_description=prop.description,
        no_of_rooms=prop.no_of_rooms,
        no_of_bathrooms=prop.no_of_bathrooms,
        max_no_of_guests=prop.max_no_of_guests,
        price_per_day=prop.price_per_day,
        image_url=prop.image_url,
        property_status=prop.status.value,
        property_rate=round(prop.rate, 2),
        property_rating_count=prop.rating_count,
        has_wifi=prop.has_wifi,
        has_parking=prop.has_parking,
        has_pool=prop.has_pool,
        has_ac=prop.has_ac,
        has_heater=prop.has_heater,
        has_pet_friendly=prop.has_pet_friendly,
        city=address.city if address else None,
        state=address.state if address else None,
        country=address.country if address else None,
    )


def to_property_detail(prop: Property, host: User) -> PropertyDetailResponse:
    base = to_property_response(prop).model_dump()
    address = prop.address
    return PropertyDetailResponse(
        **base,
        building_no=address.building_no if address else None,
        street=address.street if address else None,
        postal_code=address.postal_code if address else None,
        host_id=host.id,
        host_name=host.username,
        host_phone=host.phone,
    )


def to_booking_response(booking: Booking) -> BookingResponse:
    prop = booking.property
    return BookingResponse(
        booking_id=booking.id,
        property_id=booking.property_id,
        user_id=booking.user_id,
        checkin_date=booking.checkin_date,
        checkout_date=booking.checkout_date,
        is_paid=booking.is_paid,
        booking_status=booking.status.value,
        has_extra_cot=booking.has_extra_cot,
        has_deep_clean=booking.has_deep_clean,
        property_name=prop.name if prop else None,
        property_image=prop.image_url if prop else None,
        city=prop.address.city if prop and prop.address else None,
        username=booking.user.username if booking.user else None,
    )


def to_complaint_response(complaint: Complaint) -> ComplaintResponse:
    return ComplaintResponse(
        complaint_id=complaint.id,
        user_id=complaint.user_id,
        booking_id=complaint.booking_id,
        complaint_description=complaint.description,
        complaint_status=complaint.status.value,
        complaint_type=complaint.type.value,
        complaint_date=complaint.created_at,
        username=complaint.user.username if complaint.user else None,
    )


def _apply_address(address: Address, data: PropertyRequest | PropertyUpdateRequest) -> None:
    address.building_no = data.building_no
    address.street = data.street
    address.city = data.city
    address.state = data.state
    address.country = data.country
    address.postal_code = data.postal_code


def _apply_property_fields(prop: Property, data: PropertyRequest | PropertyUpdateRequest) -> None:
    prop.name = data.property_name
    prop.description = data.property_description
    prop.no_of_rooms = data.no_of_rooms
    prop.no_of_bathrooms = data.no_of_bathrooms
    prop.max_no_of_guests = data.max_no_of_guests
    prop.price_per_day = data.price_per_day
    prop.image_url = data.image_url
    prop.has_wifi = data.has_wifi
    prop.has_parking = data.has_parking
    prop.has_pool = data.has_pool
    prop.has_ac = data.has_ac
    prop.has_heater = data.has_heater
    prop.has_pet_friendly = data.has_pet_friendly


class HostService:
    def __init__(self, store: Store, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    def _require_host(self, actor: User) -> None:
        if actor.role != UserRole.HOST:
            raise UnauthorizedError("Only hosts can manage properties")

    def _owned_property(self, actor: User, property_id: int) -> Property:
        prop = self.store.get(Property, property_id, "Property not found")
        if prop.user_id != actor.id:
            raise UnauthorizedError("You do not own this property")
        return prop

    def add_property(self, actor: User, data: PropertyRequest) -> PropertyResponse:
        host = self.store.get(User, actor.id, "Host not found")
        if host.role != UserRole.HOST:
            raise UnauthorizedError("Only hosts can add properties")

        address = Address()
        _apply_address(address, data)
        self.store.save(address)

        prop = Property(
            user_id=host.id,
            address_id=address.id,
            status=PropertyStatus.AVAILABLE,
            rate=0.0,
            rating_count=0,
        )
        _apply_property_fields(prop, data)
        prop.address = address
        self.store.save(prop)
        log.info("Property %s registered by host %s", prop.id, host.id)
        return to_property_response(prop)

    def update_property(self, actor: User, property_id: int, data: PropertyUpdateRequest) -> PropertyResponse:
        prop = self._owned_property(actor, property_id)
        new_status = decode_enum(PropertyStatus, data.property_status, "property_status")
        if prop.status == PropertyStatus.DELETED:
            raise InvalidOperationError("Property is already deleted")
        if new_status == PropertyStatus.DELETED:
            raise InvalidOperationError("Use delete to remove a property")
        if new_status != prop.status:
            check_transition("Property", prop.status, new_status)

        _apply_property_fields(prop, data)
        prop.status = new_status
        _apply_address(prop.address, data)
        self.store.save(prop)
        return to_property_response(prop)

    def view_all_properties(self, actor: User) -> list[PropertyResponse]:
        self._require_host(actor)
        props = self.store.find_by(Property, Property.status != PropertyStatus.DELETED, user_id=actor.id)
        return [to_property_response(p) for p in props]

    def view_property(self, property_id: int) -> PropertyDetailResponse:
        prop = self.store.get(Property, property_id, "Property not found")
        host = self.store.get(User, prop.user_id, "Host not found")
        return to_property_detail(prop, host)

    def delete_property(self, actor: User, property_id: int) -> None:
        prop = self._owned_property(actor, property_id)
        bookings = self.store.find_by(Booking, property_id=prop.id)
        ensure_property_deletable(prop, bookings)
        prop.status = PropertyStatus.DELETED
        self.store.save(prop)
        log.info("Property %s soft-deleted by host %s", prop.id, actor.id)

    def view_deleted_properties(self, actor: User) -> list[PropertyResponse]:
        self._require_host(actor)
        props = self.store.find_by(Property, user_id=actor.id, status=PropertyStatus.DELETED)
        return [to_property_response(p) for p in props]

    def view_bookings(self, actor: User) -> list[BookingResponse]:
        self._require_host(actor)
        owned_ids = [p.id for p in self.store.find_by(Property, user_id=actor.id)]
        if not owned_ids:
            return []
        bookings = self.store.find_by(Booking, Booking.property_id.in_(owned_ids))
        return [to_booking_response(b) for b in bookings]

    def add_complaint(self, actor: User, data: ComplaintRequest) -> ComplaintResponse:
        if data.booking_id is not None:
            booking = self.store.get(Booking, data.booking_id, "Booking not found")
            if booking.user_id != actor.id and booking.property.user_id != actor.id:
                raise UnauthorizedError("You can only complain about your own bookings")
        complaint_type = decode_enum(ComplaintType, data.complaint_type, "complaint_type")
        complaint = Complaint(
            user_id=actor.id,
            booking_id=data.booking_id,
            description=data.complaint_description,
            type=complaint_type,
            status=ComplaintStatus.PENDING,
            created_at=self.clock(),
        )
        complaint.user = actor
        self.store.save(complaint)
        return to_complaint_response(complaint)
