"""HostService: property lifecycle, ownership checks, complaints."""
from datetime import datetime, timezone

import pytest

from app.exceptions import InvalidOperationError, NotFoundError, UnauthorizedError, ValidationError
from app.models.audit_log import Audit
from app.models.booking import BookingStatus
from app.models.complaint import Complaint, ComplaintStatus
from app.models.property import Property, PropertyStatus
from app.models.user import UserRole
from app.schemas.complaint import ComplaintRequest
from app.schemas.property import PropertyRequest, PropertyUpdateRequest
from app.services.hosts import HostService

from conftest import PROPERTY_BODY

FIXED_NOW = datetime(2026, 10, 16, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(store):
    return HostService(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def host(make_user):
    return make_user("hostess", role=UserRole.HOST)


# =============================================================================
# Add / view
# =============================================================================

def test_add_property_starts_available_and_unrated(db, service, host):
    resp = service.add_property(host, PropertyRequest(**PROPERTY_BODY))

    assert resp.property_status == "AVAILABLE"
    assert resp.property_rate == 0.0
    assert resp.property_rating_count == 0
    assert resp.city == "Shimla"
    prop = db.get(Property, resp.property_id)
    assert prop.user_id == host.id
    assert prop.address.street == "Ridge Road"


def test_only_hosts_add_properties(service, make_user):
    client = make_user(role=UserRole.CLIENT)
    with pytest.raises(UnauthorizedError, match="Only hosts"):
        service.add_property(client, PropertyRequest(**PROPERTY_BODY))


def test_listing_hides_deleted_and_other_hosts(service, host, make_user, make_property):
    other = make_user(role=UserRole.HOST)
    visible = make_property(host, name="Visible")
    gone = make_property(host, status=PropertyStatus.DELETED, name="Gone")
    make_property(other, name="Not mine")

    assert [p.property_id for p in service.view_all_properties(host)] == [visible.id]
    assert [p.property_id for p in service.view_deleted_properties(host)] == [gone.id]


def test_view_property_detail(service, host, make_property):
    prop = make_property(host)
    detail = service.view_property(prop.id)
    assert detail.host_id == host.id
    assert detail.host_name == "hostess"
    assert detail.postal_code == "411001"


def test_view_missing_property(service):
    with pytest.raises(NotFoundError, match="Property not found"):
        service.view_property(404)


# =============================================================================
# Delete
# =============================================================================

def test_delete_blocked_by_confirmed_booking(db, service, host, make_user, make_property, make_booking):
    prop = make_property(host)
    make_booking(prop, make_user(), status=BookingStatus.CONFIRMED)

    with pytest.raises(InvalidOperationError, match="active bookings"):
        service.delete_property(host, prop.id)
    assert db.get(Property, prop.id).status == PropertyStatus.AVAILABLE


def test_delete_with_property_7_and_booking_9(db, service, host, make_user):
    from app.models.booking import Booking
    from app.models.property import Address

    address = Address(street="7 Main St", city="Goa", state="GA", country="India")
    db.add(address)
    db.flush()
    db.add(Property(id=7, user_id=host.id, address_id=address.id, name="Seven", price_per_day=80.0,
                    status=PropertyStatus.AVAILABLE, rate=0.0, rating_count=0))
    db.flush()
    guest = make_user()
    booking = Booking(id=9, property_id=7, user_id=guest.id, checkin_date=datetime(2026, 12, 1).date(),
                      checkout_date=datetime(2026, 12, 3).date(), status=BookingStatus.CONFIRMED)
    db.add(booking)
    db.flush()

    with pytest.raises(InvalidOperationError):
        service.delete_property(host, 7)
    assert db.get(Property, 7).status == PropertyStatus.AVAILABLE

    booking.status = BookingStatus.CANCELLED
    db.flush()
    service.delete_property(host, 7)
    assert db.get(Property, 7).status == PropertyStatus.DELETED


def test_delete_twice_fails(service, host, make_property, make_user, make_booking):
    prop = make_property(host)
    make_booking(prop, make_user(), status=BookingStatus.COMPLETED)

    service.delete_property(host, prop.id)
    with pytest.raises(InvalidOperationError, match="already deleted"):
        service.delete_property(host, prop.id)


def test_delete_requires_available_status(service, host, make_property):
    prop = make_property(host, status=PropertyStatus.BOOKED)
    with pytest.raises(InvalidOperationError, match="Only available properties"):
        service.delete_property(host, prop.id)


def test_delete_requires_ownership(service, host, make_user, make_property):
    prop = make_property(host)
    intruder = make_user(role=UserRole.HOST)
    with pytest.raises(UnauthorizedError):
        service.delete_property(intruder, prop.id)


def test_delete_missing_property_is_not_found_before_ownership(service, make_user):
    with pytest.raises(NotFoundError):
        service.delete_property(make_user(role=UserRole.HOST), 12345)


def test_property_delete_writes_no_user_audit(db, service, host, make_property):
    prop = make_property(host)
    service.delete_property(host, prop.id)
    assert db.query(Audit).count() == 0


# =============================================================================
# Update
# =============================================================================

def _update_body(**overrides):
    body = dict(PROPERTY_BODY, property_status="AVAILABLE")
    body.update(overrides)
    return PropertyUpdateRequest(**body)


def test_update_property_fields_and_status(db, service, host, make_property):
    prop = make_property(host)
    resp = service.update_property(host, prop.id, _update_body(property_name="Renamed", property_status="booked", city="Manali"))

    assert resp.property_name == "Renamed"
    assert resp.property_status == "BOOKED"
    assert db.get(Property, prop.id).address.city == "Manali"


def test_update_rejects_unknown_status(service, host, make_property):
    prop = make_property(host)
    with pytest.raises(ValidationError, match="property_status"):
        service.update_property(host, prop.id, _update_body(property_status="GONE"))


def test_update_cannot_delete(service, host, make_property):
    prop = make_property(host)
    with pytest.raises(InvalidOperationError, match="Use delete"):
        service.update_property(host, prop.id, _update_body(property_status="DELETED"))


def test_update_deleted_property_fails(service, host, make_property):
    prop = make_property(host, status=PropertyStatus.DELETED)
    with pytest.raises(InvalidOperationError, match="already deleted"):
        service.update_property(host, prop.id, _update_body())


# =============================================================================
# Bookings and complaints
# =============================================================================

def test_view_bookings_covers_only_own_properties(service, host, make_user, make_property, make_booking):
    mine = make_property(host)
    theirs = make_property(make_user(role=UserRole.HOST))
    guest = make_user()
    b1 = make_booking(mine, guest)
    make_booking(theirs, guest)

    bookings = service.view_bookings(host)
    assert [b.booking_id for b in bookings] == [b1.id]
    assert bookings[0].username == guest.username
    assert bookings[0].city == "Pune"


def test_view_bookings_without_properties(service, host):
    assert service.view_bookings(host) == []


def test_add_complaint(db, service, host, make_user, make_property, make_booking):
    booking = make_booking(make_property(host), make_user())
    resp = service.add_complaint(host, ComplaintRequest(
        booking_id=booking.id, complaint_description="Guest broke a window", complaint_type="property"))

    assert resp.complaint_status == "PENDING"
    assert resp.complaint_type == "PROPERTY"
    assert resp.username == "hostess"
    stored = db.get(Complaint, resp.complaint_id)
    assert stored.status == ComplaintStatus.PENDING
    assert stored.created_at.replace(tzinfo=timezone.utc) == FIXED_NOW


def test_add_complaint_unknown_booking(service, host):
    with pytest.raises(NotFoundError, match="Booking not found"):
        service.add_complaint(host, ComplaintRequest(booking_id=77, complaint_description="x", complaint_type="OTHER"))


def test_add_complaint_unknown_type(service, host):
    with pytest.raises(ValidationError):
        service.add_complaint(host, ComplaintRequest(complaint_description="x", complaint_type="RUDE"))


def test_complaint_about_someone_elses_booking_is_refused(db, service, host, make_user, make_property, make_booking):
    booking = make_booking(make_property(host), make_user())
    outsider = make_user()
    with pytest.raises(UnauthorizedError, match="your own bookings"):
        service.add_complaint(outsider, ComplaintRequest(
            booking_id=booking.id, complaint_description="Not my stay", complaint_type="BOOKING"))
    assert db.query(Complaint).count() == 0


def test_guest_complains_about_own_booking(service, host, make_user, make_property, make_booking):
    guest = make_user()
    booking = make_booking(make_property(host), guest)
    resp = service.add_complaint(guest, ComplaintRequest(
        booking_id=booking.id, complaint_description="No hot water", complaint_type="PROPERTY"))
    assert resp.user_id == guest.id


@pytest.mark.parametrize("view", ["view_all_properties", "view_deleted_properties", "view_bookings"])
def test_host_listings_require_host_role(service, make_user, view):
    with pytest.raises(UnauthorizedError, match="Only hosts"):
        getattr(service, view)(make_user(role=UserRole.CLIENT))
