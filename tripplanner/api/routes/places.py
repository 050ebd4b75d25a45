"""
Pinned map location routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.place import PinnedPlace
from tripplanner.schemas.place import PinnedPlaceCreate, PinnedPlaceUpdate, PinnedPlaceResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["pinned-places"])


@router.get("/trips/{trip_id}/pinned-places", response_model=List[PinnedPlaceResponse])
async def list_pinned_places(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return db.query(PinnedPlace).filter(
        PinnedPlace.trip_id == trip_id
    ).order_by(PinnedPlace.created_at).all()


@router.post("/trips/{trip_id}/pinned-places", response_model=PinnedPlaceResponse, status_code=status.HTTP_201_CREATED)
async def create_pinned_place(
    trip_id: str,
    place_data: PinnedPlaceCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Pin a location on the trip map."""
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    place = PinnedPlace(trip_id=trip_id, **place_data.model_dump())
    db.add(place)
    db.commit()
    db.refresh(place)
    return place


@router.put("/pinned-places/{place_id}", response_model=PinnedPlaceResponse)
async def update_pinned_place(
    place_id: str,
    place_data: PinnedPlaceUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    place = get_trip_child(PinnedPlace, place_id, current_user.id, db)
    apply_update(place, place_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(place)
    return place


@router.delete("/pinned-places/{place_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pinned_place(
    place_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    place = get_trip_child(PinnedPlace, place_id, current_user.id, db)
    db.delete(place)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
