"""
Day-by-day itinerary activity routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.activity import Activity
from tripplanner.schemas.activity import ActivityCreate, ActivityUpdate, ActivityResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["activities"])


@router.get("/trips/{trip_id}/activities", response_model=List[ActivityResponse])
async def list_activities(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List activities ordered by day, then by position within the day."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Activity).filter(
        Activity.trip_id == trip_id
    ).order_by(Activity.day_index, Activity.order).all()


@router.post("/trips/{trip_id}/activities", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    trip_id: str,
    activity_data: ActivityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an activity to one day of the trip."""
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    activity = Activity(trip_id=trip_id, **activity_data.model_dump())
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


@router.put("/activities/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: str,
    activity_data: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an activity, including moving it to another day or position."""
    activity = get_trip_child(Activity, activity_id, current_user.id, db)
    apply_update(activity, activity_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(activity)
    return activity


@router.delete("/activities/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an activity."""
    activity = get_trip_child(Activity, activity_id, current_user.id, db)
    db.delete(activity)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
