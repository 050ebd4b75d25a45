"""
Shopping / packing list routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.shopping import ShoppingItem
from tripplanner.schemas.shopping import ShoppingItemCreate, ShoppingItemUpdate, ShoppingItemResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["shopping"])


@router.get("/trips/{trip_id}/shopping", response_model=List[ShoppingItemResponse])
async def list_shopping_items(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List items by position."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(ShoppingItem).filter(
        ShoppingItem.trip_id == trip_id
    ).order_by(ShoppingItem.order).all()


@router.post("/trips/{trip_id}/shopping", response_model=ShoppingItemResponse, status_code=status.HTTP_201_CREATED)
async def create_shopping_item(
    trip_id: str,
    item_data: ShoppingItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    item = ShoppingItem(trip_id=trip_id, **item_data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.patch("/shopping/{item_id}", response_model=ShoppingItemResponse)
async def update_shopping_item(
    item_id: str,
    item_data: ShoppingItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Toggle, rename, recategorize or move an item."""
    item = get_trip_child(ShoppingItem, item_id, current_user.id, db)
    apply_update(item, item_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(item)
    return item


@router.delete("/shopping/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shopping_item(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = get_trip_child(ShoppingItem, item_id, current_user.id, db)
    db.delete(item)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
