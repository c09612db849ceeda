"""
Services package exports
"""
from movie_booking.services.auth_service import (
    AuthService,
    create_access_token,
    decode_access_token,
)
from movie_booking.services.catalog_service import CatalogService
from movie_booking.services.booking_service import BookingService

__all__ = [
    "AuthService",
    "create_access_token",
    "decode_access_token",
    "CatalogService",
    "BookingService",
]
