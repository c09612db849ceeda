"""
Auth Service - password hashing and signed session tokens
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from movie_booking.core import metrics
from movie_booking.core.config import settings
from movie_booking.core.database import execute, flush
from movie_booking.core.exceptions import AuthError, ValidationError
from movie_booking.models import User
import logging

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def create_access_token(user_id: int, email: str) -> str:
    """Sign a token carrying the user's id and email"""
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "user_id": user_id,
        "email": email,
        "exp": expires_at,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry of a token and return its claims

    Raises:
        AuthError: If the token is malformed, tampered with or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired", status_code=403)
    except jwt.PyJWTError:
        raise AuthError("Invalid token", status_code=403)


class AuthService:
    """Service for signup and login"""

    @staticmethod
    async def signup(db: AsyncSession, email: str, password: str) -> User:
        """
        Register a new user

        Args:
            db: Database session
            email: Login email, must be unique
            password: Plaintext password, stored only as a bcrypt digest

        Returns:
            Created user

        Raises:
            ValidationError: If the email is already registered
        """
        # Hashing is CPU bound; keep it off the event loop
        password_digest = await run_in_threadpool(pwd_context.hash, password)

        try:
            async with db.begin():
                result = await execute(db, select(User.user_id).where(User.email == email))
                if result.first() is not None:
                    raise ValidationError("Email already registered")

                user = User(email=email, password=password_digest)
                db.add(user)
                await flush(db)
        except IntegrityError:
            # Lost a race against a concurrent signup for the same email
            raise ValidationError("Email already registered")

        metrics.signups_total.inc()
        logger.info("👤 User registered", extra={'user_id': user.user_id})
        return user

    @staticmethod
    async def login(db: AsyncSession, email: str, password: str) -> Dict[str, Any]:
        """
        Verify credentials and issue a session token

        Returns:
            {"auth": True, "token": ..., "user_id": ...}

        Raises:
            AuthError: 400 for an unknown email, 401 for a wrong password
        """
        result = await execute(db, select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if not user:
            metrics.logins_total.labels(result="unknown_email").inc()
            raise AuthError("Email or password incorrect", status_code=400)

        password_ok = await run_in_threadpool(pwd_context.verify, password, user.password)
        if not password_ok:
            metrics.logins_total.labels(result="bad_password").inc()
            raise AuthError("Unauthorized", status_code=401)

        token = create_access_token(user.user_id, user.email)
        metrics.logins_total.labels(result="success").inc()
        logger.info("🔑 User logged in", extra={'user_id': user.user_id})

        return {"auth": True, "token": token, "user_id": user.user_id}
