"""
Booking model - links a user to one seat of one screening
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint

from movie_booking.core.database import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # One booking per seat per screening; violations surface as ConflictError
        UniqueConstraint('movie_id', 'timeslot_id', 'seat_id', 'date', name='uq_booking_seat_date'),
    )

    booking_id = Column(Integer, primary_key=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.movie_id"), nullable=False)
    timeslot_id = Column(Integer, ForeignKey("timeslots.timeslot_id"), nullable=False)
    seat_id = Column(Integer, ForeignKey("seats.seat_id"), nullable=False)
    date = Column(Date, nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return (f"<Booking(booking_id={self.booking_id}, user_id={self.user_id}, "
                f"seat_id={self.seat_id}, date='{self.date}')>")

    @property
    def seat_key(self) -> tuple:
        """(movie_id, timeslot_id, seat_id) identifying the booked seat row"""
        return (self.movie_id, self.timeslot_id, self.seat_id)
