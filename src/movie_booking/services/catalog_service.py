"""
Catalog Service - read-only lookups over movies, timeslots and seats
"""
from datetime import date
from typing import List, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_booking.core.database import execute
from movie_booking.core.exceptions import NotFoundError
from movie_booking.models import Movie, Timeslot, Seat


class CatalogService:
    """Service for catalog queries"""

    @staticmethod
    async def list_movies(db: AsyncSession) -> List[Movie]:
        """List every movie"""
        result = await execute(db, select(Movie).order_by(Movie.movie_id))
        return result.scalars().all()

    @staticmethod
    async def get_movie_details(db: AsyncSession, movie_id: int) -> Tuple[Movie, List[date]]:
        """Get a movie and the ascending distinct dates it has timeslots on"""
        result = await execute(db, select(Movie).where(Movie.movie_id == movie_id))
        movie = result.scalar_one_or_none()

        if not movie:
            raise NotFoundError(f"Movie {movie_id} not found")

        dates_query = (
            select(Timeslot.date)
            .where(Timeslot.movie_id == movie_id)
            .distinct()
            .order_by(Timeslot.date.asc())
        )
        dates_result = await execute(db, dates_query)
        available_dates = dates_result.scalars().all()

        return movie, available_dates

    @staticmethod
    async def list_timeslots(db: AsyncSession, movie_id: int, screening_date: date):
        """Distinct (timeslot_id, start_time, end_time) for a movie on a date"""
        query = (
            select(Timeslot.timeslot_id, Timeslot.start_time, Timeslot.end_time)
            .where(Timeslot.movie_id == movie_id, Timeslot.date == screening_date)
            .distinct()
            .order_by(Timeslot.start_time, Timeslot.timeslot_id)
        )
        result = await execute(db, query)
        return result.all()

    @staticmethod
    async def list_seats(db: AsyncSession, movie_id: int, timeslot_id: int):
        """
        Seat map for a screening

        Rows are ordered by seat_number ascending; clients render the seat map
        in this order.
        """
        query = (
            select(Seat.seat_id, Seat.seat_number, Seat.booking_status)
            .where(Seat.movie_id == movie_id, Seat.timeslot_id == timeslot_id)
            .order_by(Seat.seat_number.asc())
        )
        result = await execute(db, query)
        return result.all()
