"""
Travel document routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripplanner.core.config import settings
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.document import Document
from tripplanner.schemas.document import DocumentCreate, DocumentUpdate, DocumentResponse
from tripplanner.services.access import check_trip_access, get_trip_child, apply_update
from tripplanner.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


@router.get("/trips/{trip_id}/documents", response_model=List[DocumentResponse])
async def list_documents(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return db.query(Document).filter(
        Document.trip_id == trip_id
    ).order_by(Document.created_at).all()


@router.post("/trips/{trip_id}/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    trip_id: str,
    document_data: DocumentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Store a document. The file travels inline as a data URL."""
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    if len(document_data.file_url) > settings.MAX_UPLOAD_SIZE:
        logger.warning(f"Rejected document of {len(document_data.file_url)} chars for trip {trip_id}")
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size: {settings.MAX_UPLOAD_SIZE} bytes"
        )

    document = Document(trip_id=trip_id, user_id=current_user.id, **document_data.model_dump())
    db.add(document)
    db.commit()
    db.refresh(document)
    return document


@router.put("/documents/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    document_data: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rename or retype a document."""
    document = get_trip_child(Document, document_id, current_user.id, db)
    apply_update(document, document_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(document)
    return document


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    document = get_trip_child(Document, document_id, current_user.id, db)
    db.delete(document)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
