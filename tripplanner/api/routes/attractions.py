"""
Attraction routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.attraction import Attraction
from tripplanner.schemas.attraction import AttractionCreate, AttractionUpdate, AttractionResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["attractions"])


@router.get("/trips/{trip_id}/attractions", response_model=List[AttractionResponse])
async def list_attractions(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Attraction).filter(
        Attraction.trip_id == trip_id
    ).order_by(Attraction.created_at).all()


@router.post("/trips/{trip_id}/attractions", response_model=AttractionResponse, status_code=status.HTTP_201_CREATED)
async def create_attraction(
    trip_id: str,
    attraction_data: AttractionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    attraction = Attraction(trip_id=trip_id, **attraction_data.model_dump())
    db.add(attraction)
    db.commit()
    db.refresh(attraction)
    return attraction


@router.put("/attractions/{attraction_id}", response_model=AttractionResponse)
async def update_attraction(
    attraction_id: str,
    attraction_data: AttractionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    attraction = get_trip_child(Attraction, attraction_id, current_user.id, db)
    apply_update(attraction, attraction_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(attraction)
    return attraction


@router.delete("/attractions/{attraction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attraction(
    attraction_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    attraction = get_trip_child(Attraction, attraction_id, current_user.id, db)
    db.delete(attraction)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
