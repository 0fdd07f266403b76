"""Host properties and their owned address."""
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, ForeignKey, Enum as SQLEnum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class PropertyStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"
    DELETED = "DELETED"


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    building_no = Column(String(50), nullable=True)
    street = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=True)


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    address_id = Column(Integer, ForeignKey("addresses.id"), unique=True, nullable=False)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    no_of_rooms = Column(Integer, nullable=False, default=1)
    no_of_bathrooms = Column(Integer, nullable=False, default=1)
    max_no_of_guests = Column(Integer, nullable=False, default=1)
    price_per_day = Column(Float, nullable=False)
    image_url = Column(String(1000), nullable=True)

    has_wifi = Column(Boolean, nullable=False, default=False)
    has_parking = Column(Boolean, nullable=False, default=False)
    has_pool = Column(Boolean, nullable=False, default=False)
    has_ac = Column(Boolean, nullable=False, default=False)
    has_heater = Column(Boolean, nullable=False, default=False)
    has_pet_friendly = Column(Boolean, nullable=False, default=False)

    # Soft delete: DELETED rows stay in the table and are hidden from the host's main list
    status = Column(SQLEnum(PropertyStatus), nullable=False, default=PropertyStatus.AVAILABLE)

    # Rating aggregate, updated when a client rates a completed booking
    rate = Column(Float, nullable=False, default=0.0)
    rating_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    address = relationship("Address", uselist=False)
    host = relationship("User")
