"""
User model
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime

from movie_booking.core.database import Base


class User(Base):
    """User model - stores login credentials"""
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt digest, never plaintext
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User(user_id={self.user_id}, email='{self.email}')>"
