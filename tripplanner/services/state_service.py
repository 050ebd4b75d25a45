"""
Builds snapshot responses for a user's trips and for shared trips.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from tripplanner.models import (
    Trip, TripRole, Activity, Accommodation, Attraction, ShoppingItem,
    Document, Expense, PinnedPlace, Flight
)
from tripplanner.schemas.trip import TripResponse, compute_days
from tripplanner.schemas.activity import ActivityResponse
from tripplanner.schemas.accommodation import AccommodationResponse
from tripplanner.schemas.attraction import AttractionResponse
from tripplanner.schemas.shopping import ShoppingItemResponse
from tripplanner.schemas.document import DocumentResponse
from tripplanner.schemas.expense import ExpenseResponse
from tripplanner.schemas.place import PinnedPlaceResponse
from tripplanner.schemas.flight import FlightResponse
from tripplanner.schemas.state import StateSnapshot, SharedTripResponse
from tripplanner.services.access import get_accessible_trips


def trip_response(trip: Trip, role: Optional[TripRole] = None) -> TripResponse:
    """Serialize a trip together with the caller's role."""
    response = TripResponse.model_validate(trip)
    response.role = role
    return response


def _for_trips(db: Session, model, schema, trip_ids: List[str], *order_by) -> list:
    """Rows of a trip-owned table for the given trips, as response schemas."""
    if not trip_ids:
        return []
    query = db.query(model).filter(model.trip_id.in_(trip_ids))
    if order_by:
        query = query.order_by(*order_by)
    return [schema.model_validate(row) for row in query.all()]


def build_state_snapshot(user_id: str, db: Session) -> StateSnapshot:
    """All entity collections for every trip visible to the user."""
    trips = get_accessible_trips(user_id, db)
    trip_ids = [trip.id for trip, _ in trips]

    return StateSnapshot(
        trips=[trip_response(trip, role) for trip, role in trips],
        activities=_for_trips(db, Activity, ActivityResponse, trip_ids, Activity.day_index, Activity.order),
        accommodations=_for_trips(db, Accommodation, AccommodationResponse, trip_ids, Accommodation.check_in_date),
        attractions=_for_trips(db, Attraction, AttractionResponse, trip_ids),
        shopping_items=_for_trips(db, ShoppingItem, ShoppingItemResponse, trip_ids, ShoppingItem.order),
        documents=_for_trips(db, Document, DocumentResponse, trip_ids),
        expenses=_for_trips(db, Expense, ExpenseResponse, trip_ids, Expense.created_at),
        pinned_places=_for_trips(db, PinnedPlace, PinnedPlaceResponse, trip_ids, PinnedPlace.created_at),
        flights=_for_trips(db, Flight, FlightResponse, trip_ids),
    )


def build_shared_trip(trip: Trip, db: Session) -> SharedTripResponse:
    """Public read-only view of a trip; documents and expenses are never shared."""
    trip_ids = [trip.id]
    return SharedTripResponse(
        trip=trip_response(trip),
        days=compute_days(trip),
        activities=_for_trips(db, Activity, ActivityResponse, trip_ids, Activity.day_index, Activity.order),
        accommodations=_for_trips(db, Accommodation, AccommodationResponse, trip_ids, Accommodation.check_in_date),
        attractions=_for_trips(db, Attraction, AttractionResponse, trip_ids),
        shopping_items=_for_trips(db, ShoppingItem, ShoppingItemResponse, trip_ids, ShoppingItem.order),
    )
