"""
SQLAlchemy Models for the Movie Booking Service

Import all models here for easy access and to ensure proper relationship setup.
"""
from movie_booking.core.database import Base

# Import all models to register them with SQLAlchemy
from movie_booking.models.user import User
from movie_booking.models.movie import Movie
from movie_booking.models.timeslot import Timeslot
from movie_booking.models.seat import Seat, SeatStatus
from movie_booking.models.booking import Booking

# Export all models
__all__ = [
    "Base",
    "User",
    "Movie",
    "Timeslot",
    "Seat",
    "SeatStatus",
    "Booking",
]
