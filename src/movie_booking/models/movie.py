"""
Movie model - read-only catalog entries
"""
from sqlalchemy import Column, Integer, String, Text, Date
from sqlalchemy.orm import relationship

from movie_booking.core.database import Base


class Movie(Base):
    __tablename__ = "movies"

    movie_id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text)
    genre = Column(String(100))
    duration_minutes = Column(Integer)
    release_date = Column(Date)
    thumbnail_url = Column(String(500))

    # Relationships
    timeslots = relationship("Timeslot", back_populates="movie", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Movie(movie_id={self.movie_id}, title='{self.title}')>"
