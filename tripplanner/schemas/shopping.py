"""
Pydantic schemas for ShoppingItem entity.
"""
from pydantic import Field
from typing import Optional
from tripplanner.schemas.base import CamelModel


class ShoppingItemBase(CamelModel):
    """Base shopping item schema."""
    text: str = Field(min_length=1)
    done: bool = False
    order: int = 0
    category: Optional[str] = None


class ShoppingItemCreate(ShoppingItemBase):
    """Schema for shopping item creation."""
    pass


class ShoppingItemUpdate(CamelModel):
    """Schema for shopping item update (toggle, rename, reorder)."""
    text: Optional[str] = Field(default=None, min_length=1)
    done: Optional[bool] = None
    order: Optional[int] = None
    category: Optional[str] = None


class ShoppingItemResponse(ShoppingItemBase):
    """Schema for shopping item response."""
    id: str
    trip_id: str
