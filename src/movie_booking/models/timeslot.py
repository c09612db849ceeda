"""
Timeslot model - a scheduled screening of a movie
"""
from sqlalchemy import Column, Integer, Date, Time, ForeignKey
from sqlalchemy.orm import relationship

from movie_booking.core.database import Base


class Timeslot(Base):
    __tablename__ = "timeslots"

    timeslot_id = Column(Integer, primary_key=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.movie_id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    # Relationships
    movie = relationship("Movie", back_populates="timeslots")
    seats = relationship("Seat", back_populates="timeslot", cascade="all, delete-orphan")

    def __repr__(self):
        return (f"<Timeslot(timeslot_id={self.timeslot_id}, movie_id={self.movie_id}, "
                f"date='{self.date}', start='{self.start_time}')>")
