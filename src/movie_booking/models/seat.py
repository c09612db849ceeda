"""
Seat model - CRITICAL for booking consistency
booking_status only moves free -> booked through a conditional UPDATE
"""
from enum import IntEnum
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from movie_booking.core.database import Base


class SeatStatus(IntEnum):
    """Stored as a plain integer column"""
    FREE = 0
    BOOKED = 1


class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint('timeslot_id', 'seat_number', name='uq_timeslot_seat_number'),
    )

    seat_id = Column(Integer, primary_key=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.movie_id", ondelete="CASCADE"), nullable=False, index=True)
    timeslot_id = Column(Integer, ForeignKey("timeslots.timeslot_id", ondelete="CASCADE"), nullable=False, index=True)
    seat_number = Column(Integer, nullable=False)
    booking_status = Column(Integer, nullable=False, default=SeatStatus.FREE)

    # Relationships
    timeslot = relationship("Timeslot", back_populates="seats")

    def __repr__(self):
        return (f"<Seat(seat_id={self.seat_id}, timeslot_id={self.timeslot_id}, "
                f"seat_number={self.seat_number}, booking_status={self.booking_status})>")
