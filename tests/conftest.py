import os
import tempfile

# Settings are read at import time, so the test environment must be in place
# before anything from movie_booking is imported.
TEST_DB_DIR = tempfile.mkdtemp(prefix="movie_booking_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(TEST_DB_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256-signing"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["POOL_SIZE"] = "1"
os.environ["MAX_OVERFLOW"] = "0"
os.environ["LOG_JSON"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["REQUIRE_AUTH"] = "false"

from datetime import date, time

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import select

from movie_booking.core.config import settings
from movie_booking.core.database import AsyncSessionLocal, engine, init_db, drop_db
from movie_booking.main import app
from movie_booking.models import Movie, Timeslot, Seat, User, SeatStatus

SCREENING_DATE = date(2024, 1, 1)


@pytest_asyncio.fixture
async def db_setup():
    """Fresh schema for each test"""
    await drop_db()
    await init_db()

    yield

    await drop_db()
    # Pooled connections are bound to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_setup):
    async with AsyncSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_setup):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client


@pytest_asyncio.fixture
async def catalog(db_setup):
    """
    One movie with two screening dates:

    - timeslot 1 on 2024-01-01 18:00, seats 1-5 (inserted out of order)
    - timeslot 2 on 2024-01-01 13:00, seats 6-7
    - timeslot 3 on 2024-01-03 18:00, no seats
    plus a second movie with no timeslots.
    """
    async with AsyncSessionLocal() as session:
        session.add_all([
            Movie(movie_id=1, title="Arrival", genre="Science Fiction", duration_minutes=116,
                  release_date=date(2016, 11, 11), thumbnail_url="https://example.com/arrival.jpg"),
            Movie(movie_id=2, title="Spirited Away", genre="Animation", duration_minutes=125,
                  thumbnail_url="https://example.com/spirited-away.jpg"),
        ])
        await session.flush()

        session.add_all([
            Timeslot(timeslot_id=1, movie_id=1, date=SCREENING_DATE, start_time=time(18, 0), end_time=time(20, 0)),
            Timeslot(timeslot_id=2, movie_id=1, date=SCREENING_DATE, start_time=time(13, 0), end_time=time(15, 0)),
            Timeslot(timeslot_id=3, movie_id=1, date=date(2024, 1, 3), start_time=time(18, 0), end_time=time(20, 0)),
        ])
        await session.flush()

        for seat_id, seat_number in [(3, 3), (1, 1), (5, 5), (2, 2), (4, 4)]:
            session.add(Seat(seat_id=seat_id, movie_id=1, timeslot_id=1,
                             seat_number=seat_number, booking_status=SeatStatus.FREE))
        for seat_id in (6, 7):
            session.add(Seat(seat_id=seat_id, movie_id=1, timeslot_id=2,
                             seat_number=seat_id - 5, booking_status=SeatStatus.FREE))
        await session.commit()

    yield


@pytest_asyncio.fixture
async def user(client):
    """A registered user; returns (user_id, email)"""
    email = "a@x.com"
    response = await client.post("/signup", json={"email": email, "password": "pw"})
    assert response.status_code == 201

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User.user_id).where(User.email == email))
        user_id = result.scalar_one()

    return user_id, email


@pytest.fixture
def require_auth():
    """Turn bearer-token enforcement on for one test"""
    original = settings.REQUIRE_AUTH
    settings.REQUIRE_AUTH = True
    yield
    settings.REQUIRE_AUTH = original


def booking_body(user_id: int, email: str, seat_id: int = 5, timeslot_id: int = 1,
                 booking_date: str = "2024-01-01", movie_id: int = 1) -> dict:
    return {
        "movie_id": movie_id,
        "timeslot_id": timeslot_id,
        "seat_id": seat_id,
        "date": booking_date,
        "user_id": user_id,
        "email": email,
    }
