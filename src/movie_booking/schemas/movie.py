"""
Pydantic schemas for catalog resources
"""
from datetime import date, time
from typing import List, Optional
from pydantic import BaseModel, Field


class MovieResponse(BaseModel):
    """Movie response schema"""
    movie_id: int
    title: str
    description: Optional[str] = None
    genre: Optional[str] = None
    duration_minutes: Optional[int] = None
    release_date: Optional[date] = None
    thumbnail_url: Optional[str] = None

    class Config:
        from_attributes = True


class MovieDetailsResponse(BaseModel):
    """A movie plus every date it is screened on"""
    movie: MovieResponse
    available_dates: List[date] = Field(default_factory=list, description="Ascending screening dates")


class TimeslotResponse(BaseModel):
    timeslot_id: int
    start_time: time
    end_time: time

    class Config:
        from_attributes = True


class SeatResponse(BaseModel):
    seat_id: int
    seat_number: int
    booking_status: int = Field(..., description="0 = free, 1 = booked")

    class Config:
        from_attributes = True
