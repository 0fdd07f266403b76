from app.schemas.user import (
    UserSignupRequest, UserLoginRequest, UserUpdateRequest, ResetPasswordRequest,
    UserResponse, LoginResponse, AuditResponse,
)
from app.schemas.property import PropertyRequest, PropertyUpdateRequest, PropertyResponse, PropertyDetailResponse
from app.schemas.booking import BookingRequest, BookingResponse, RatingRequest
from app.schemas.complaint import ComplaintRequest, ComplaintResponse, ComplaintResolveRequest
