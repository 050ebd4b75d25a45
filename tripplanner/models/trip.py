"""
Trip model and the records that control access to a trip.
"""
from sqlalchemy import Column, String, Date, Float, ForeignKey, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from tripplanner.db.base import Base, BaseModel
import enum


class TripRole(str, enum.Enum):
    """Permission of a user on a trip."""
    OWNER = "owner"
    PARTICIPANT = "participant"
    VIEWER = "viewer"


class Trip(BaseModel):
    """Trip model representing a planned journey."""
    __tablename__ = "trips"

    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    destination = Column(String(200), nullable=True)
    tags = Column(JSON, nullable=True)
    budget = Column(Float, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="trips")
    members = relationship("TripMember", back_populates="trip", cascade="all, delete-orphan")
    share_tokens = relationship("ShareToken", back_populates="trip", cascade="all, delete-orphan")
    invites = relationship("TripInvite", back_populates="trip", cascade="all, delete-orphan")
    activities = relationship("Activity", back_populates="trip", cascade="all, delete-orphan")
    accommodations = relationship("Accommodation", back_populates="trip", cascade="all, delete-orphan")
    attractions = relationship("Attraction", back_populates="trip", cascade="all, delete-orphan")
    shopping_items = relationship("ShoppingItem", back_populates="trip", cascade="all, delete-orphan")
    documents = relationship("Document", back_populates="trip", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
    pinned_places = relationship("PinnedPlace", back_populates="trip", cascade="all, delete-orphan")
    flights = relationship("Flight", back_populates="trip", cascade="all, delete-orphan")


class TripMember(BaseModel):
    """A non-owner user's membership in a trip."""
    __tablename__ = "trip_members"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    role = Column(SQLEnum(TripRole), nullable=False, default=TripRole.VIEWER)

    # Relationships
    trip = relationship("Trip", back_populates="members")
    user = relationship("User", back_populates="memberships")


class ShareToken(Base):
    """Public read-only link to a trip."""
    __tablename__ = "share_tokens"

    token = Column(String(64), primary_key=True)
    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)

    trip = relationship("Trip", back_populates="share_tokens")


class TripInvite(Base):
    """Invite link granting a role on a trip to whoever accepts it."""
    __tablename__ = "trip_invites"

    token = Column(String(64), primary_key=True)
    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(SQLEnum(TripRole), nullable=False)

    trip = relationship("Trip", back_populates="invites")
