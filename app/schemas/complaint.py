"""Complaint schemas."""
from datetime import datetime
from pydantic import BaseModel, Field


class ComplaintRequest(BaseModel):
    booking_id: int | None = None
    complaint_description: str = Field(min_length=1)
    complaint_type: str  # decoded by the service


class ComplaintResolveRequest(BaseModel):
    outcome: str  # RESOLVED or REJECTED


class ComplaintResponse(BaseModel):
    complaint_id: int
    user_id: int
    booking_id: int | None = None
    complaint_description: str
    complaint_status: str
    complaint_type: str
    complaint_date: datetime
    username: str | None = None
