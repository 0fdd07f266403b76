"""Property and address schemas."""
from pydantic import BaseModel, Field


class AddressFields(BaseModel):
    building_no: str | None = None
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    country: str = Field(min_length=1)
    postal_code: str | None = None


class PropertyFields(BaseModel):
    property_name: str = Field(min_length=1, max_length=255)
    property_description: str | None = None
    no_of_rooms: int = Field(default=1, ge=1)
    no_of_bathrooms: int = Field(default=1, ge=0)
    max_no_of_guests: int = Field(default=1, ge=1)
    price_per_day: float = Field(gt=0)
    image_url: str | None = None
    has_wifi: bool = False
    has_parking: bool = False
    has_pool: bool = False
    has_ac: bool = False
    has_heater: bool = False
    has_pet_friendly: bool = False


class PropertyRequest(PropertyFields, AddressFields):
    pass


class PropertyUpdateRequest(PropertyFields, AddressFields):
    property_status: str  # AVAILABLE or BOOKED; decoded by the service


class PropertyResponse(BaseModel):
    property_id: int
    property_name: str
    property_description: str | None = None
    no_of_rooms: int
    no_of_bathrooms: int
    max_no_of_guests: int
    price_per_day: float
    image_url: str | None = None
    property_status: str
    property_rate: float
    property_rating_count: int
    has_wifi: bool
    has_parking: bool
    has_pool: bool
    has_ac: bool
    has_heater: bool
    has_pet_friendly: bool
    city: str | None = None
    state: str | None = None
    country: str | None = None


class PropertyDetailResponse(PropertyResponse):
    building_no: str | None = None
    street: str | None = None
    postal_code: str | None = None
    host_id: int
    host_name: str
    host_phone: str
