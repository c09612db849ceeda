"""
Pydantic schemas for API request/response validation
"""
from movie_booking.schemas.auth import (
    SignupRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from movie_booking.schemas.movie import (
    MovieResponse,
    MovieDetailsResponse,
    TimeslotResponse,
    SeatResponse,
)
from movie_booking.schemas.booking import (
    BookingRequest,
    BookingResponse,
    BookingCreatedResponse,
    UserBookingResponse,
    UserBookingListResponse,
)

__all__ = [
    # Auth
    "SignupRequest",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    # Catalog
    "MovieResponse",
    "MovieDetailsResponse",
    "TimeslotResponse",
    "SeatResponse",
    # Bookings
    "BookingRequest",
    "BookingResponse",
    "BookingCreatedResponse",
    "UserBookingResponse",
    "UserBookingListResponse",
]
