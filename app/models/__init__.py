"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from app.models.user import User
from app.models.property import Address, Property
from app.models.booking import Booking
from app.models.complaint import Complaint
from app.models.audit_log import Audit

__all__ = [
    "User",
    "Address",
    "Property",
    "Booking",
    "Complaint",
    "Audit",
]
