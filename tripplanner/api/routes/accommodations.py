"""
Accommodation routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.accommodation import Accommodation
from tripplanner.schemas.accommodation import AccommodationCreate, AccommodationUpdate, AccommodationResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["accommodations"])


@router.get("/trips/{trip_id}/accommodations", response_model=List[AccommodationResponse])
async def list_accommodations(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List stays in insertion order."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Accommodation).filter(
        Accommodation.trip_id == trip_id
    ).order_by(Accommodation.created_at).all()


@router.post("/trips/{trip_id}/accommodations", response_model=AccommodationResponse, status_code=status.HTTP_201_CREATED)
async def create_accommodation(
    trip_id: str,
    accommodation_data: AccommodationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a stay to the trip."""
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    accommodation = Accommodation(trip_id=trip_id, **accommodation_data.model_dump())
    db.add(accommodation)
    db.commit()
    db.refresh(accommodation)
    return accommodation


@router.put("/accommodations/{accommodation_id}", response_model=AccommodationResponse)
async def update_accommodation(
    accommodation_id: str,
    accommodation_data: AccommodationUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a stay; the resulting date range must stay ordered."""
    accommodation = get_trip_child(Accommodation, accommodation_id, current_user.id, db)

    changes = accommodation_data.model_dump(exclude_unset=True)
    check_in = changes.get("check_in_date") or accommodation.check_in_date
    check_out = changes.get("check_out_date") or accommodation.check_out_date
    if check_out < check_in:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="checkOutDate must not be before checkInDate"
        )

    apply_update(accommodation, changes)
    db.commit()
    db.refresh(accommodation)
    return accommodation


@router.delete("/accommodations/{accommodation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_accommodation(
    accommodation_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a stay."""
    accommodation = get_trip_child(Accommodation, accommodation_id, current_user.id, db)
    db.delete(accommodation)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
