"""
Flight routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.flight import Flight
from tripplanner.schemas.flight import FlightCreate, FlightUpdate, FlightResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["flights"])


@router.get("/trips/{trip_id}/flights", response_model=List[FlightResponse])
async def list_flights(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Flight).filter(
        Flight.trip_id == trip_id
    ).order_by(Flight.departure_date_time).all()


@router.post("/trips/{trip_id}/flights", response_model=FlightResponse, status_code=status.HTTP_201_CREATED)
async def create_flight(
    trip_id: str,
    flight_data: FlightCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    flight = Flight(trip_id=trip_id, **flight_data.model_dump())
    db.add(flight)
    db.commit()
    db.refresh(flight)
    return flight


@router.put("/flights/{flight_id}", response_model=FlightResponse)
async def update_flight(
    flight_id: str,
    flight_data: FlightUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    flight = get_trip_child(Flight, flight_id, current_user.id, db)
    apply_update(flight, flight_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(flight)
    return flight


@router.delete("/flights/{flight_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_flight(
    flight_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    flight = get_trip_child(Flight, flight_id, current_user.id, db)
    db.delete(flight)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
