"""
Expense tracking routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.expense import Expense
from tripplanner.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["expenses"])


@router.get("/trips/{trip_id}/expenses", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List expenses oldest first."""
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Expense).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.created_at).all()


@router.post("/trips/{trip_id}/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    trip_id: str,
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record an expense."""
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    expense = Expense(trip_id=trip_id, **expense_data.model_dump())
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    expense_data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    expense = get_trip_child(Expense, expense_id, current_user.id, db)
    apply_update(expense, expense_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(expense)
    return expense


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    expense = get_trip_child(Expense, expense_id, current_user.id, db)
    db.delete(expense)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
