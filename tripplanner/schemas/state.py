"""
Snapshot schemas: the full state of a user's trips, and a shared trip.
"""
from typing import List
from tripplanner.schemas.base import CamelModel
from tripplanner.schemas.trip import TripResponse, Day
from tripplanner.schemas.activity import ActivityResponse
from tripplanner.schemas.accommodation import AccommodationResponse
from tripplanner.schemas.attraction import AttractionResponse
from tripplanner.schemas.shopping import ShoppingItemResponse
from tripplanner.schemas.document import DocumentResponse
from tripplanner.schemas.expense import ExpenseResponse
from tripplanner.schemas.place import PinnedPlaceResponse
from tripplanner.schemas.flight import FlightResponse


class StateSnapshot(CamelModel):
    """Every entity collection for the trips visible to one user."""
    trips: List[TripResponse] = []
    activities: List[ActivityResponse] = []
    accommodations: List[AccommodationResponse] = []
    attractions: List[AttractionResponse] = []
    shopping_items: List[ShoppingItemResponse] = []
    documents: List[DocumentResponse] = []
    expenses: List[ExpenseResponse] = []
    pinned_places: List[PinnedPlaceResponse] = []
    flights: List[FlightResponse] = []


class SharedTripResponse(CamelModel):
    """Read-only view of one trip behind a share link."""
    trip: TripResponse
    days: List[Day]
    activities: List[ActivityResponse]
    accommodations: List[AccommodationResponse]
    attractions: List[AttractionResponse]
    shopping_items: List[ShoppingItemResponse]
