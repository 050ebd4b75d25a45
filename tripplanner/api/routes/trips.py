"""
Trip management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.trip import Trip, TripRole
from tripplanner.schemas.trip import TripCreate, TripUpdate, TripResponse
from tripplanner.services.access import check_trip_access, get_accessible_trips, apply_update
from tripplanner.services.state_service import trip_response
from tripplanner.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all trips the current user owns or joined."""
    return [trip_response(trip, role) for trip, role in get_accessible_trips(current_user.id, db)]


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip owned by the current user."""
    new_trip = Trip(user_id=current_user.id, **trip_data.model_dump())
    db.add(new_trip)
    db.commit()
    db.refresh(new_trip)
    logger.info(f"User {current_user.id} created trip {new_trip.id}")

    return trip_response(new_trip, TripRole.OWNER)


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details."""
    trip, role = check_trip_access(trip_id, current_user.id, db)
    return trip_response(trip, role)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: str,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the fields that were sent."""
    trip, role = check_trip_access(trip_id, current_user.id, db, require_edit=True)

    changes = trip_data.model_dump(exclude_unset=True)
    start_date = changes.get("start_date") or trip.start_date
    end_date = changes.get("end_date") or trip.end_date
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="endDate must not be before startDate"
        )

    apply_update(trip, changes)
    db.commit()
    db.refresh(trip)

    return trip_response(trip, role)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and everything planned in it."""
    trip, _ = check_trip_access(trip_id, current_user.id, db, require_owner=True)
    db.delete(trip)
    db.commit()
    logger.info(f"User {current_user.id} deleted trip {trip_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
