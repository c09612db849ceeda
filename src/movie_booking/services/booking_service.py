"""
Booking Service - create/edit/delete bookings while keeping seat status in step

Seat status only changes through a conditional UPDATE (compare-and-set) that
runs in the same transaction as the booking write, and the bookings table has
a unique constraint on (movie_id, timeslot_id, seat_id, date). Between them
two concurrent requests for one seat cannot both succeed.
"""
from datetime import date
from typing import List
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_booking.core import metrics
from movie_booking.core.database import execute, flush
from movie_booking.core.exceptions import ConflictError, NotFoundError, ValidationError
from movie_booking.models import Booking, Movie, Timeslot, Seat, SeatStatus
import logging

logger = logging.getLogger(__name__)


# SQLSTATE class 23 code raised by PostgreSQL for a dangling reference
FOREIGN_KEY_VIOLATION = "23503"


def _is_foreign_key_violation(e: IntegrityError) -> bool:
    sqlstate = getattr(e.orig, "sqlstate", None) or getattr(e.orig, "pgcode", None)
    if sqlstate:
        return sqlstate == FOREIGN_KEY_VIOLATION
    # sqlite3 carries the extended result code name instead
    return getattr(e.orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_FOREIGNKEY"


def _integrity_error(e: IntegrityError) -> Exception:
    """Map a constraint violation on bookings to a domain error"""
    if _is_foreign_key_violation(e):
        return ValidationError("Booking references an unknown user, movie, timeslot or seat")
    return ConflictError("Booking already exists")


class BookingService:
    """Service for managing bookings"""

    @staticmethod
    async def _claim_seat(db: AsyncSession, movie_id: int, timeslot_id: int, seat_id: int) -> None:
        """Flip a seat free -> booked, failing if it is not currently free"""
        claim = (
            update(Seat)
            .where(
                Seat.seat_id == seat_id,
                Seat.movie_id == movie_id,
                Seat.timeslot_id == timeslot_id,
                Seat.booking_status == SeatStatus.FREE,
            )
            .values(booking_status=SeatStatus.BOOKED)
            .execution_options(synchronize_session=False)
        )
        result = await execute(db, claim)
        if result.rowcount == 1:
            return

        seat_query = select(Seat.seat_id).where(
            Seat.seat_id == seat_id,
            Seat.movie_id == movie_id,
            Seat.timeslot_id == timeslot_id,
        )
        seat_result = await execute(db, seat_query)
        if seat_result.first() is None:
            raise NotFoundError(f"Seat {seat_id} not found for movie {movie_id}, timeslot {timeslot_id}")
        raise ConflictError("Seat already booked")

    @staticmethod
    async def _release_seat(db: AsyncSession, movie_id: int, timeslot_id: int, seat_id: int) -> None:
        release = (
            update(Seat)
            .where(
                Seat.seat_id == seat_id,
                Seat.movie_id == movie_id,
                Seat.timeslot_id == timeslot_id,
            )
            .values(booking_status=SeatStatus.FREE)
            .execution_options(synchronize_session=False)
        )
        await execute(db, release)

    @staticmethod
    async def create_booking(
        db: AsyncSession,
        movie_id: int,
        timeslot_id: int,
        seat_id: int,
        booking_date: date,
        user_id: int,
        email: str,
    ) -> Booking:
        """
        Book one seat for one screening

        Runs as a single transaction:
        1. Reject if a booking for the same (movie, timeslot, seat, date) exists
        2. Compare-and-set the seat from free to booked
        3. Insert the booking row (unique constraint backs up step 1)

        Raises:
            ConflictError: Seat or tuple already booked
            NotFoundError: Seat does not belong to the movie/timeslot
        """
        try:
            async with db.begin():
                existing_query = select(Booking.booking_id).where(
                    Booking.movie_id == movie_id,
                    Booking.timeslot_id == timeslot_id,
                    Booking.seat_id == seat_id,
                    Booking.date == booking_date,
                )
                existing = await execute(db, existing_query)
                if existing.first() is not None:
                    raise ConflictError("Booking already exists")

                await BookingService._claim_seat(db, movie_id, timeslot_id, seat_id)

                booking = Booking(
                    movie_id=movie_id,
                    timeslot_id=timeslot_id,
                    seat_id=seat_id,
                    date=booking_date,
                    user_id=user_id,
                    email=email,
                )
                db.add(booking)
                await flush(db)
        except IntegrityError as e:
            error = _integrity_error(e)
            if isinstance(error, ConflictError):
                metrics.booking_conflicts_total.inc()
            raise error from e
        except ConflictError:
            metrics.booking_conflicts_total.inc()
            raise

        metrics.bookings_created_total.inc()
        logger.info(
            f"🎟️ Seat {seat_id} booked for timeslot {timeslot_id}",
            extra={'booking_id': booking.booking_id, 'user_id': user_id}
        )
        return booking

    @staticmethod
    async def edit_booking(
        db: AsyncSession,
        booking_id: int,
        movie_id: int,
        timeslot_id: int,
        seat_id: int,
        booking_date: date,
        user_id: int,
        email: str,
    ) -> None:
        """
        Overwrite every field of a booking

        When the seat changes, the old seat is freed and the new one is
        claimed with the same compare-and-set used on create.

        Raises:
            NotFoundError: No booking with this id, or the new seat is unknown
            ConflictError: The new seat or tuple is already booked
        """
        try:
            async with db.begin():
                booking_query = (
                    select(Booking)
                    .where(Booking.booking_id == booking_id)
                    .with_for_update()
                )
                booking_result = await execute(db, booking_query)
                booking = booking_result.scalar_one_or_none()

                if not booking:
                    raise NotFoundError(f"Booking {booking_id} not found")

                old_seat = booking.seat_key
                new_seat = (movie_id, timeslot_id, seat_id)

                if new_seat != old_seat:
                    await BookingService._release_seat(db, *old_seat)
                    await BookingService._claim_seat(db, *new_seat)

                overwrite = (
                    update(Booking)
                    .where(Booking.booking_id == booking_id)
                    .values(
                        movie_id=movie_id,
                        timeslot_id=timeslot_id,
                        seat_id=seat_id,
                        date=booking_date,
                        user_id=user_id,
                        email=email,
                    )
                    .execution_options(synchronize_session=False)
                )
                result = await execute(db, overwrite)
                if result.rowcount == 0:
                    raise NotFoundError(f"Booking {booking_id} not found")
        except IntegrityError as e:
            error = _integrity_error(e)
            if isinstance(error, ConflictError):
                metrics.booking_conflicts_total.inc()
            raise error from e
        except ConflictError:
            metrics.booking_conflicts_total.inc()
            raise

        metrics.bookings_updated_total.inc()
        logger.info("✏️ Booking updated", extra={'booking_id': booking_id, 'user_id': user_id})

    @staticmethod
    async def delete_booking(db: AsyncSession, booking_id: int) -> None:
        """
        Delete a booking and free its seat

        Raises:
            NotFoundError: No booking with this id
        """
        async with db.begin():
            booking_query = (
                select(Booking)
                .where(Booking.booking_id == booking_id)
                .with_for_update()
            )
            booking_result = await execute(db, booking_query)
            booking = booking_result.scalar_one_or_none()

            if not booking:
                raise NotFoundError(f"Booking {booking_id} not found")

            result = await execute(
                db,
                delete(Booking)
                .where(Booking.booking_id == booking_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Booking {booking_id} not found")

            await BookingService._release_seat(db, *booking.seat_key)

        metrics.bookings_deleted_total.inc()
        logger.info("🗑️ Booking deleted", extra={'booking_id': booking_id})

    @staticmethod
    async def list_bookings_for_user(db: AsyncSession, user_id: int) -> List:
        """Every booking owned by a user, joined with movie, timeslot and seat"""
        query = (
            select(
                Booking.booking_id,
                Booking.date,
                Booking.user_id,
                Booking.email,
                Movie.thumbnail_url,
                Movie.title,
                Movie.movie_id,
                Timeslot.start_time,
                Timeslot.end_time,
                Seat.seat_number,
            )
            .select_from(Booking)
            .join(Movie, Booking.movie_id == Movie.movie_id)
            .join(Timeslot, Booking.timeslot_id == Timeslot.timeslot_id)
            .join(Seat, Booking.seat_id == Seat.seat_id)
            .where(Booking.user_id == user_id)
            .order_by(Booking.date, Booking.booking_id)
        )
        result = await execute(db, query)
        return result.all()
