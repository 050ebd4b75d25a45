"""
Pydantic schemas for Expense entity.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from tripplanner.schemas.base import CamelModel


class ExpenseCreate(CamelModel):
    """Schema for expense creation."""
    description: str = Field(min_length=1)
    amount: float = Field(ge=0)


class ExpenseUpdate(CamelModel):
    """Schema for expense update."""
    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, ge=0)


class ExpenseResponse(ExpenseCreate):
    """Schema for expense response."""
    id: str
    trip_id: str
    created_at: datetime
