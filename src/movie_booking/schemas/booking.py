"""Pydantic schemas for Booking resources"""
import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class BookingRequest(BaseModel):
    """Body of both add-booking and edit-booking"""
    movie_id: int
    timeslot_id: int
    seat_id: int
    date: datetime.date
    user_id: int
    email: str = Field(..., min_length=1, max_length=255)


class BookingResponse(BaseModel):
    booking_id: int
    movie_id: int
    timeslot_id: int
    seat_id: int
    date: datetime.date
    user_id: int
    email: str

    class Config:
        from_attributes = True


class BookingCreatedResponse(BaseModel):
    message: str
    booking: BookingResponse


class UserBookingResponse(BaseModel):
    """Denormalized booking row joined with movie, timeslot and seat"""
    booking_id: int
    date: datetime.date
    user_id: int
    email: str
    thumbnail_url: Optional[str] = None
    title: str
    movie_id: int
    start_time: datetime.time
    end_time: datetime.time
    seat_number: int

    class Config:
        from_attributes = True


class UserBookingListResponse(BaseModel):
    bookings: List[UserBookingResponse]
