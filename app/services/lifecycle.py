"""Status lifecycle rules for users, properties, bookings and complaints.

Every status change goes through check_transition(). The tables below list, for
each current status, the statuses it may move to; a status with no outgoing
transitions is terminal. Guards raise; they never mutate.
"""
from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Iterable, TypeVar

from app.exceptions import InvalidOperationError, ValidationError
from app.models.booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from app.models.complaint import ComplaintStatus
from app.models.property import Property, PropertyStatus
from app.models.user import User, UserStatus

E = TypeVar("E", bound=enum.Enum)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


USER_TRANSITIONS: dict[UserStatus, frozenset[UserStatus]] = {
    UserStatus.ACTIVE: frozenset({UserStatus.BLOCKED, UserStatus.DELETED}),
    UserStatus.BLOCKED: frozenset({UserStatus.ACTIVE, UserStatus.DELETED}),
    UserStatus.DELETED: frozenset(),
}

PROPERTY_TRANSITIONS: dict[PropertyStatus, frozenset[PropertyStatus]] = {
    PropertyStatus.AVAILABLE: frozenset({PropertyStatus.BOOKED, PropertyStatus.DELETED}),
    PropertyStatus.BOOKED: frozenset({PropertyStatus.AVAILABLE}),
    PropertyStatus.DELETED: frozenset(),
}

BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

COMPLAINT_TRANSITIONS: dict[ComplaintStatus, frozenset[ComplaintStatus]] = {
    ComplaintStatus.PENDING: frozenset({ComplaintStatus.RESOLVED, ComplaintStatus.REJECTED}),
    ComplaintStatus.RESOLVED: frozenset(),
    ComplaintStatus.REJECTED: frozenset(),
}

_TABLES = {
    "User": USER_TRANSITIONS,
    "Property": PROPERTY_TRANSITIONS,
    "Booking": BOOKING_TRANSITIONS,
    "Complaint": COMPLAINT_TRANSITIONS,
}


def is_terminal(kind: str, status: enum.Enum) -> bool:
    return not _TABLES[kind][status]


def check_transition(kind: str, current: E, target: E) -> None:
    """Raise InvalidOperationError unless `kind` may move from `current` to `target`."""
    table = _TABLES[kind]
    if current == target:
        raise InvalidOperationError(f"{kind} is already {current.value.lower()}")
    if target not in table[current]:
        raise InvalidOperationError(f"{kind} cannot move from {current.value} to {target.value}")


def is_active_booking(booking: Booking) -> bool:
    return booking.status in ACTIVE_BOOKING_STATUSES


def ensure_user_deletable(user: User) -> None:
    if user.status == UserStatus.DELETED:
        raise InvalidOperationError("User is already deleted")
    check_transition("User", user.status, UserStatus.DELETED)


def ensure_property_deletable(prop: Property, bookings: Iterable[Booking]) -> None:
    """Idempotency first, then status, then the active-booking scan."""
    if prop.status == PropertyStatus.DELETED:
        raise InvalidOperationError("Property is already deleted")
    if prop.status != PropertyStatus.AVAILABLE:
        raise InvalidOperationError("Only available properties can be deleted")
    for booking in bookings:
        if is_active_booking(booking):
            raise InvalidOperationError("Cannot delete property with active bookings")


def decode_enum(enum_cls: type[E], raw: str | enum.Enum | None, field: str) -> E:
    """Closed decode of a free-form status/role/type string. Unknown values are a ValidationError."""
    if isinstance(raw, enum_cls):
        return raw
    value = (str(raw) if raw is not None else "").strip().upper()
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field}: {raw!r}. Allowed values: {allowed}", field=field) from None
