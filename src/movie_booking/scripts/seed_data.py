"""
Seed script to populate database with sample data for testing

Usage:
    python -m movie_booking.scripts.seed_data
"""
import asyncio
from datetime import date, time, timedelta
from sqlalchemy import select

from movie_booking.core.database import AsyncSessionLocal, init_db
from movie_booking.models import User, Movie, Timeslot, Seat, SeatStatus
from movie_booking.services.auth_service import pwd_context

SEATS_PER_TIMESLOT = 40
SCREENING_DAYS = 3
SHOWTIMES = [
    (time(13, 0), time(15, 30)),
    (time(18, 0), time(20, 30)),
    (time(21, 0), time(23, 30)),
]


async def create_sample_users(db):
    """Create sample users"""
    users_data = [
        {"email": "john@example.com", "password": "password123"},
        {"email": "jane@example.com", "password": "password123"},
    ]

    users = []
    for user_data in users_data:
        result = await db.execute(select(User).where(User.email == user_data["email"]))
        existing_user = result.scalar_one_or_none()

        if existing_user:
            print(f"User {user_data['email']} already exists, skipping...")
            users.append(existing_user)
            continue

        user = User(
            email=user_data["email"],
            password=pwd_context.hash(user_data["password"]),
        )
        db.add(user)
        users.append(user)
        print(f"Created user: {user.email}")

    await db.commit()
    return users


async def create_sample_movies(db):
    """Create sample movies, each with a few days of screenings"""
    movies_data = [
        {
            "title": "The Grand Budapest Hotel",
            "description": "A concierge and his lobby boy are framed for murder at a famous European hotel.",
            "genre": "Comedy",
            "duration_minutes": 99,
            "release_date": date(2014, 3, 28),
            "thumbnail_url": "https://example.com/grand-budapest.jpg",
        },
        {
            "title": "Arrival",
            "description": "A linguist works with the military to communicate with alien visitors.",
            "genre": "Science Fiction",
            "duration_minutes": 116,
            "release_date": date(2016, 11, 11),
            "thumbnail_url": "https://example.com/arrival.jpg",
        },
        {
            "title": "Spirited Away",
            "description": "A girl wanders into a world ruled by gods, witches and spirits.",
            "genre": "Animation",
            "duration_minutes": 125,
            "release_date": date(2001, 7, 20),
            "thumbnail_url": "https://example.com/spirited-away.jpg",
        },
    ]

    movies = []
    for movie_data in movies_data:
        result = await db.execute(select(Movie).where(Movie.title == movie_data["title"]))
        existing_movie = result.scalar_one_or_none()

        if existing_movie:
            print(f"Movie '{movie_data['title']}' already exists, skipping...")
            movies.append(existing_movie)
            continue

        movie = Movie(**movie_data)
        db.add(movie)
        await db.flush()  # Get movie ID

        seats_created = await create_screenings_for_movie(db, movie)
        movies.append(movie)
        print(f"Created movie: {movie.title} with {seats_created} seats")

    await db.commit()
    return movies


async def create_screenings_for_movie(db, movie: Movie) -> int:
    """Create timeslots for the next few days and a full seat map for each"""
    seats_created = 0
    first_day = date.today() + timedelta(days=1)

    for day_offset in range(SCREENING_DAYS):
        screening_date = first_day + timedelta(days=day_offset)

        for start_time, end_time in SHOWTIMES:
            timeslot = Timeslot(
                movie_id=movie.movie_id,
                date=screening_date,
                start_time=start_time,
                end_time=end_time,
            )
            db.add(timeslot)
            await db.flush()

            for seat_number in range(1, SEATS_PER_TIMESLOT + 1):
                db.add(Seat(
                    movie_id=movie.movie_id,
                    timeslot_id=timeslot.timeslot_id,
                    seat_number=seat_number,
                    booking_status=SeatStatus.FREE,
                ))
                seats_created += 1

    return seats_created


async def main():
    print("Creating tables...")
    await init_db()

    async with AsyncSessionLocal() as db:
        await create_sample_users(db)
        await create_sample_movies(db)

    print("✅ Seed complete")


if __name__ == "__main__":
    asyncio.run(main())
