"""
Travel document model.
"""
from sqlalchemy import Column, String, ForeignKey, Text
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class Document(BaseModel):
    """Uploaded travel document; file_url holds a data URL or a hosted URL."""
    __tablename__ = "documents"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    type = Column(String(20), nullable=True)
    file_url = Column(Text, nullable=False, default="")

    trip = relationship("Trip", back_populates="documents")
