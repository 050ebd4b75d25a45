"""Models package - Import all models for SQLAlchemy registration."""
from tripplanner.models.user import User
from tripplanner.models.trip import Trip, TripMember, TripRole, ShareToken, TripInvite
from tripplanner.models.activity import Activity
from tripplanner.models.accommodation import Accommodation
from tripplanner.models.attraction import Attraction
from tripplanner.models.shopping import ShoppingItem
from tripplanner.models.document import Document
from tripplanner.models.expense import Expense
from tripplanner.models.place import PinnedPlace
from tripplanner.models.flight import Flight

__all__ = [
    "User",
    "Trip",
    "TripMember",
    "TripRole",
    "ShareToken",
    "TripInvite",
    "Activity",
    "Accommodation",
    "Attraction",
    "ShoppingItem",
    "Document",
    "Expense",
    "PinnedPlace",
    "Flight",
]
