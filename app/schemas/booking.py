"""Booking schemas."""
from datetime import date
from pydantic import BaseModel, Field, model_validator


class BookingRequest(BaseModel):
    property_id: int
    checkin_date: date
    checkout_date: date
    has_extra_cot: bool = False
    has_deep_clean: bool = False

    @model_validator(mode="after")
    def dates_ordered(self):
        if self.checkout_date <= self.checkin_date:
            raise ValueError("Check-out date must be after check-in date")
        return self


class RatingRequest(BaseModel):
    rating: int = Field(ge=1, le=5)


class BookingResponse(BaseModel):
    booking_id: int
    property_id: int
    user_id: int
    checkin_date: date
    checkout_date: date
    is_paid: bool
    booking_status: str
    has_extra_cot: bool
    has_deep_clean: bool
    property_name: str | None = None
    property_image: str | None = None
    city: str | None = None
    username: str | None = None
