"""
User model for authentication and user management.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class User(BaseModel):
    """User identified by email."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False, default="")
    name = Column(String(100), nullable=True)

    # Relationships
    trips = relationship("Trip", back_populates="owner", cascade="all, delete-orphan")
    memberships = relationship("TripMember", back_populates="user", cascade="all, delete-orphan")
