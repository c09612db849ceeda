"""Bookings API endpoints"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from movie_booking.core.database import get_db
from movie_booking.core.exceptions import ConflictError, NotFoundError, ValidationError
from movie_booking.middleware.auth import verify_token
from movie_booking.schemas import (
    BookingRequest,
    BookingResponse,
    BookingCreatedResponse,
    MessageResponse,
    UserBookingResponse,
    UserBookingListResponse,
)
from movie_booking.services import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_token)])


@router.post("/add-booking", response_model=BookingCreatedResponse, status_code=201)
async def create_booking(
    booking_data: BookingRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Book a seat

    - 400 if the seat is already booked for that movie, timeslot and date
    - 404 if the seat does not belong to the movie/timeslot
    """
    try:
        booking = await BookingService.create_booking(
            db=db,
            movie_id=booking_data.movie_id,
            timeslot_id=booking_data.timeslot_id,
            seat_id=booking_data.seat_id,
            booking_date=booking_data.date,
            user_id=booking_data.user_id,
            email=booking_data.email,
        )
        return BookingCreatedResponse(
            message="Booking successful",
            booking=BookingResponse.model_validate(booking),
        )
    except (ConflictError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Error creating booking")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/edit-booking/{booking_id}", response_model=MessageResponse)
async def edit_booking(
    booking_id: int,
    booking_data: BookingRequest,
    db: AsyncSession = Depends(get_db),
):
    """Overwrite a booking; moves the seat reservation when the seat changes"""
    try:
        await BookingService.edit_booking(
            db=db,
            booking_id=booking_id,
            movie_id=booking_data.movie_id,
            timeslot_id=booking_data.timeslot_id,
            seat_id=booking_data.seat_id,
            booking_date=booking_data.date,
            user_id=booking_data.user_id,
            email=booking_data.email,
        )
        return MessageResponse(message="Booking updated successfully")
    except (ConflictError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Error editing booking", extra={'booking_id': booking_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/delete-booking/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a booking and free its seat"""
    try:
        await BookingService.delete_booking(db=db, booking_id=booking_id)
        return MessageResponse(message="Booking deleted successfully")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Error deleting booking", extra={'booking_id': booking_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/bookings/{user_id}", response_model=UserBookingListResponse)
async def list_user_bookings(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    """List all bookings for a user"""
    try:
        rows = await BookingService.list_bookings_for_user(db=db, user_id=user_id)
        return UserBookingListResponse(
            bookings=[UserBookingResponse.model_validate(row) for row in rows],
        )
    except Exception:
        logger.exception("Error fetching bookings", extra={'user_id': user_id})
        raise HTTPException(status_code=500, detail="Internal server error")
