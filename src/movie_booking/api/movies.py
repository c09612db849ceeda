"""
Movies API endpoints - Read-only operations
Uses CatalogService for queries
"""
import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from movie_booking.core.database import get_db
from movie_booking.core.exceptions import NotFoundError
from movie_booking.middleware.auth import verify_token
from movie_booking.schemas import MovieResponse, MovieDetailsResponse, TimeslotResponse, SeatResponse
from movie_booking.services import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_token)])


@router.get("/movies", response_model=List[MovieResponse])
async def list_movies(db: AsyncSession = Depends(get_db)):
    """List all movies"""
    try:
        movies = await CatalogService.list_movies(db=db)
        return [MovieResponse.model_validate(movie) for movie in movies]
    except Exception:
        logger.exception("Error fetching movies")
        raise HTTPException(status_code=500, detail="An error occurred while fetching movies")


@router.get("/movies/{movie_id}", response_model=MovieDetailsResponse)
async def get_movie_details(
    movie_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a movie and the dates it is screened on

    - **movie_id**: Movie ID
    """
    try:
        movie, available_dates = await CatalogService.get_movie_details(db=db, movie_id=movie_id)
        return MovieDetailsResponse(
            movie=MovieResponse.model_validate(movie),
            available_dates=available_dates,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Error fetching movie details", extra={'movie_id': movie_id})
        raise HTTPException(status_code=500, detail="An error occurred while fetching movie details")


@router.get("/movies/{movie_id}/availability/{date}", response_model=List[TimeslotResponse])
async def list_timeslots(
    movie_id: int,
    date: datetime.date,
    db: AsyncSession = Depends(get_db),
):
    """
    List the timeslots of a movie on a date

    - **movie_id**: Movie ID
    - **date**: Screening date (YYYY-MM-DD)
    """
    try:
        rows = await CatalogService.list_timeslots(db=db, movie_id=movie_id, screening_date=date)
        return [TimeslotResponse.model_validate(row) for row in rows]
    except Exception:
        logger.exception("Error fetching timeslots", extra={'movie_id': movie_id})
        raise HTTPException(status_code=500, detail="An error occurred while fetching timeslots")


@router.get("/movies/{movie_id}/{timeslot_id}/seats", response_model=List[SeatResponse])
async def list_seats(
    movie_id: int,
    timeslot_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Seat map for a screening, ordered by seat number

    - **movie_id**: Movie ID
    - **timeslot_id**: Timeslot ID
    """
    try:
        rows = await CatalogService.list_seats(db=db, movie_id=movie_id, timeslot_id=timeslot_id)
        return [SeatResponse.model_validate(row) for row in rows]
    except Exception:
        logger.exception("Error fetching seats", extra={'movie_id': movie_id})
        raise HTTPException(status_code=500, detail="An error occurred while fetching seats")
