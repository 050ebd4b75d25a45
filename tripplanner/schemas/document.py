"""
Pydantic schemas for Document entity.
"""
from pydantic import Field
from typing import Literal, Optional
from tripplanner.schemas.base import CamelModel

DocumentType = Literal["passport", "visa", "insurance", "booking", "other"]


class DocumentCreate(CamelModel):
    """Schema for document creation."""
    title: str = Field(min_length=1)
    type: Optional[DocumentType] = None
    file_url: str = ""


class DocumentUpdate(CamelModel):
    """Only metadata can change after upload."""
    title: Optional[str] = Field(default=None, min_length=1)
    type: Optional[DocumentType] = None


class DocumentResponse(DocumentCreate):
    """Schema for document response."""
    id: str
    trip_id: str
