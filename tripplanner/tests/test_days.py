"""
Tests for derived trip days and date helpers.
"""
from datetime import date

import pytest
from pydantic import ValidationError

from tripplanner.core.utils import date_for_day_index, day_range, to_data_url
from tripplanner.schemas.trip import TripCreate, compute_days


def test_compute_days():
    trip = TripCreate(name="Lisbon", start_date=date(2025, 6, 1), end_date=date(2025, 6, 3))
    days = compute_days(trip, trip_id="t1")

    assert [(d.day_index, d.date) for d in days] == [
        (0, date(2025, 6, 1)),
        (1, date(2025, 6, 2)),
        (2, date(2025, 6, 3)),
    ]
    assert {d.trip_id for d in days} == {"t1"}
    assert days[0].model_dump(by_alias=True, mode="json") == {
        "tripId": "t1", "date": "2025-06-01", "dayIndex": 0
    }


def test_single_day_trip():
    trip = TripCreate(name="Day trip", start_date=date(2025, 1, 1), end_date=date(2025, 1, 1))
    assert len(compute_days(trip)) == 1


def test_days_cross_month_and_leap_day():
    trip = TripCreate(name="Leap", start_date=date(2024, 2, 27), end_date=date(2024, 3, 2))
    dates = [d.date for d in compute_days(trip)]
    assert len(dates) == 5
    assert date(2024, 2, 29) in dates


def test_compute_days_is_repeatable():
    trip = TripCreate(name="Lisbon", start_date=date(2025, 6, 1), end_date=date(2025, 6, 10))
    assert compute_days(trip) == compute_days(trip)


def test_trip_rejects_end_before_start():
    with pytest.raises(ValidationError):
        TripCreate(name="Backwards", start_date=date(2025, 6, 3), end_date=date(2025, 6, 1))


def test_day_range_empty_when_inverted():
    assert day_range(date(2025, 6, 3), date(2025, 6, 1)) == []


def test_date_for_day_index():
    assert date_for_day_index(date(2025, 12, 30), 3) == date(2026, 1, 2)


def test_to_data_url():
    assert to_data_url(b"hi", "text/plain") == "data:text/plain;base64,aGk="
