"""Complaints filed by users, optionally about a booking."""
from sqlalchemy import Column, Integer, Text, ForeignKey, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.database import Base
import enum


class ComplaintType(str, enum.Enum):
    PROPERTY = "PROPERTY"
    BOOKING = "BOOKING"
    PAYMENT = "PAYMENT"
    HOST = "HOST"
    OTHER = "OTHER"


class ComplaintStatus(str, enum.Enum):
    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"


class Complaint(Base):
    __tablename__ = "complaints"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True, index=True)

    description = Column(Text, nullable=False)
    type = Column(SQLEnum(ComplaintType), nullable=False)
    status = Column(SQLEnum(ComplaintStatus), nullable=False, default=ComplaintStatus.PENDING)
    created_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User")
