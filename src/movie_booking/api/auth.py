"""Signup and login endpoints"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from movie_booking.core.database import get_db
from movie_booking.core.exceptions import AuthError, ValidationError
from movie_booking.schemas import SignupRequest, LoginRequest, LoginResponse, MessageResponse
from movie_booking.services import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=MessageResponse, status_code=201)
async def signup(
    credentials: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user

    - 201 on success
    - 400 if the email is already registered
    """
    try:
        await AuthService.signup(db=db, email=credentials.email, password=credentials.password)
        return MessageResponse(message="User registered successfully")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Signup failed")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Exchange email and password for a signed session token

    - 400 if the email is unknown
    - 401 if the password does not match
    """
    try:
        result = await AuthService.login(db=db, email=credentials.email, password=credentials.password)
        return LoginResponse(**result)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Login failed")
        raise HTTPException(status_code=500, detail="Internal server error")
