"""
Utility functions for the application.
"""
from typing import List, Tuple
from datetime import date, datetime, timedelta, timezone
import base64
import uuid


def generate_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid.uuid4().hex


def generate_token() -> str:
    """Generate a token for share and invite links."""
    return uuid.uuid4().hex + uuid.uuid4().hex


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def day_range(start_date: date, end_date: date) -> List[Tuple[int, date]]:
    """
    List (day_index, date) pairs from start_date to end_date inclusive.
    Empty when end_date is before start_date.
    """
    count = (end_date - start_date).days + 1
    return [(index, start_date + timedelta(days=index)) for index in range(max(count, 0))]


def date_for_day_index(start_date: date, day_index: int) -> date:
    """Calendar date of the given zero-based day of a trip."""
    return start_date + timedelta(days=day_index)


def to_data_url(content: bytes, mime_type: str) -> str:
    """Encode raw file content as a base64 data URL."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
