"""
Tests for the trip store in local-only mode.
"""
from datetime import date

import pytest
from pydantic import ValidationError

from tripplanner.client.storage import LocalStorage
from tripplanner.client.store import TripStore, create_store
from tripplanner.core.config import Settings


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path)


@pytest.fixture
def store(storage):
    return TripStore(storage)


@pytest.fixture
def trip(store):
    return store.add_trip({"name": "Lisbon", "startDate": "2025-06-01", "endDate": "2025-06-03"})


def test_add_trip(store, trip):
    assert trip.id
    assert trip.user_id == "local"
    assert trip.role is None
    assert store.get_trips() == [trip]
    assert store.get_trip(trip.id) == trip
    assert store.get_trip("missing") is None


def test_get_days(store, trip):
    days = store.get_days(trip)
    assert [(d.day_index, d.date) for d in days] == [
        (0, date(2025, 6, 1)), (1, date(2025, 6, 2)), (2, date(2025, 6, 3))
    ]
    assert store.get_days(trip) == days


def test_add_activity_visible_immediately(store, trip):
    activity = store.add_activity(trip.id, {"dayIndex": 1, "title": "Sintra"})
    assert activity.id
    assert store.get_activities_for_day(trip.id, 1) == [activity]
    assert store.get_activities_for_day(trip.id, 0) == []


def test_invalid_input_changes_nothing(store, trip):
    with pytest.raises(ValidationError):
        store.add_activity(trip.id, {"dayIndex": 0})
    with pytest.raises(ValidationError):
        store.add_trip({"name": "Backwards", "startDate": "2025-06-03", "endDate": "2025-06-01"})
    with pytest.raises(ValidationError):
        store.update_trip(trip.id, {"endDate": "2025-05-01"})
    with pytest.raises(ValueError):
        store.add_activity("missing", {"dayIndex": 0, "title": "Nowhere"})

    assert store.get_activities_for_trip(trip.id) == []
    assert store.get_trips() == [trip]


def test_update_trip(store, trip):
    store.update_trip(trip.id, {"name": "Porto", "tags": ["wine"]})
    updated = store.get_trip(trip.id)
    assert updated.name == "Porto"
    assert updated.tags == ["wine"]
    assert updated.start_date == trip.start_date
    assert updated.updated_at >= trip.updated_at


def test_unknown_ids_are_rejected(store):
    with pytest.raises(ValueError):
        store.update_activity("missing", {"title": "x"})
    with pytest.raises(ValueError):
        store.delete_flight("missing")


def test_delete_trip_cascades(store, trip):
    other = store.add_trip({"name": "Madrid", "startDate": "2025-07-01", "endDate": "2025-07-02"})
    store.add_activity(trip.id, {"dayIndex": 0, "title": "Tram"})
    store.add_accommodation(trip.id, {"name": "Hotel", "checkInDate": "2025-06-01", "checkOutDate": "2025-06-03"})
    store.add_attraction(trip.id, {"name": "Castle", "dayIndexes": [0]})
    store.add_shopping_item(trip.id, {"text": "Hat"})
    store.add_expense(trip.id, {"description": "Tickets", "amount": 30})
    store.add_pinned_place(trip.id, {"name": "Viewpoint"})
    store.add_flight(trip.id, {"flightNumber": "TP1"})
    kept = store.add_activity(other.id, {"dayIndex": 0, "title": "Prado"})

    store.delete_trip(trip.id)

    assert store.get_trips() == [other]
    for getter in (
        store.get_activities_for_trip, store.get_accommodations_for_trip, store.get_attractions_for_trip,
        store.get_shopping_items_for_trip, store.get_documents_for_trip, store.get_expenses_for_trip,
        store.get_pinned_places_for_trip, store.get_flights_for_trip,
    ):
        assert getter(trip.id) == []
    assert store.get_activities_for_trip(other.id) == [kept]


def test_activities_sorted_by_order(store, trip):
    late = store.add_activity(trip.id, {"dayIndex": 0, "title": "Dinner", "order": 5})
    early = store.add_activity(trip.id, {"dayIndex": 0, "title": "Breakfast", "order": 1})
    assert store.get_activities_for_day(trip.id, 0) == [early, late]


@pytest.mark.asyncio
async def test_reorder_activities(storage, store, trip):
    ids = [store.add_activity(trip.id, {"dayIndex": 0, "title": t, "order": i}).id for i, t in enumerate("abc")]
    other_day = store.add_activity(trip.id, {"dayIndex": 1, "title": "other", "order": 7})

    store.reorder_activities(trip.id, 0, [ids[2], ids[0], ids[1]])

    day = store.get_activities_for_day(trip.id, 0)
    assert [a.title for a in day] == ["c", "a", "b"]
    assert [a.order for a in day] == [0, 1, 2]
    assert store.get_activities_for_day(trip.id, 1) == [other_day]

    reloaded = TripStore(storage)
    await reloaded.initialize()
    assert [a.title for a in reloaded.get_activities_for_day(trip.id, 0)] == ["c", "a", "b"]


def test_reorder_requires_every_activity(store, trip):
    first = store.add_activity(trip.id, {"dayIndex": 0, "title": "a"})
    store.add_activity(trip.id, {"dayIndex": 0, "title": "b"})
    with pytest.raises(ValueError):
        store.reorder_activities(trip.id, 0, [first.id])


def test_accommodation_for_day(store, trip):
    assert store.get_accommodation_for_day(trip.id, 0) is None

    first = store.add_accommodation(
        trip.id, {"name": "Guesthouse", "checkInDate": "2025-06-01", "checkOutDate": "2025-06-02"}
    )
    second = store.add_accommodation(
        trip.id, {"name": "Hotel", "checkInDate": "2025-06-02", "checkOutDate": "2025-06-03"}
    )

    assert store.get_accommodation_for_day(trip.id, 0) == first
    # Overlapping stays: the first one added wins
    assert store.get_accommodation_for_day(trip.id, 1) == first
    assert store.get_accommodation_for_day(trip.id, 2) == second
    assert store.get_accommodation_for_day(trip.id, 5) is None
    assert store.get_accommodation_for_day("missing", 0) is None

    # Day indexes are mapped to dates without checking the trip length
    late = store.add_accommodation(
        trip.id, {"name": "Airport hotel", "checkInDate": "2025-06-05", "checkOutDate": "2025-06-06"}
    )
    assert store.get_accommodation_for_day(trip.id, 5) == late


def test_day_accessors_are_repeatable(store, trip):
    for title, order in (("Dinner", 3), ("Breakfast", 0), ("Lunch", 2)):
        store.add_activity(trip.id, {"dayIndex": 1, "title": title, "order": order})
    store.add_accommodation(trip.id, {"name": "Hotel", "checkInDate": "2025-06-01", "checkOutDate": "2025-06-03"})
    store.add_accommodation(trip.id, {"name": "Hostel", "checkInDate": "2025-06-02", "checkOutDate": "2025-06-03"})
    store.add_attraction(trip.id, {"name": "Castle", "dayIndexes": [1, 2]})
    before = store.state.model_copy(deep=True)

    for day_index in range(3):
        assert store.get_activities_for_day(trip.id, day_index) == store.get_activities_for_day(trip.id, day_index)
        assert store.get_accommodation_for_day(trip.id, day_index) == store.get_accommodation_for_day(trip.id, day_index)
        assert store.get_attractions_for_day(trip.id, day_index) == store.get_attractions_for_day(trip.id, day_index)
    assert store.get_days(trip) == store.get_days(trip)

    assert [a.title for a in store.get_activities_for_day(trip.id, 1)] == ["Breakfast", "Lunch", "Dinner"]
    assert store.get_accommodation_for_day(trip.id, 1).name == "Hotel"
    # Sorting for a day leaves the stored insertion order alone
    assert [a.title for a in store.get_activities_for_trip(trip.id)] == ["Dinner", "Breakfast", "Lunch"]
    assert store.state == before


def test_attractions_for_day(store, trip):
    castle = store.add_attraction(trip.id, {"name": "Castle", "dayIndexes": [0, 2]})
    museum = store.add_attraction(trip.id, {"name": "Museum", "dayIndexes": [2]})

    assert store.get_attractions_for_day(trip.id, 0) == [castle]
    assert store.get_attractions_for_day(trip.id, 2) == [castle, museum]
    assert store.get_attractions_for_day(trip.id, 1) == []

    store.update_attraction(castle.id, {"dayIndexes": [1]})
    assert store.get_attractions_for_day(trip.id, 1)[0].name == "Castle"


def test_shopping_list(store, trip):
    hat = store.add_shopping_item(trip.id, {"text": "Hat", "order": 0})
    socks = store.add_shopping_item(trip.id, {"text": "Socks", "order": 1})

    store.toggle_shopping_item(hat.id)
    assert store.get_shopping_items_for_trip(trip.id)[0].done is True
    store.toggle_shopping_item(hat.id)
    assert store.get_shopping_items_for_trip(trip.id)[0].done is False

    store.reorder_shopping_items(trip.id, [socks.id, hat.id])
    assert [i.text for i in store.get_shopping_items_for_trip(trip.id)] == ["Socks", "Hat"]

    store.delete_shopping_item(socks.id)
    assert [i.text for i in store.get_shopping_items_for_trip(trip.id)] == ["Hat"]


def test_expenses(store, trip):
    taxi = store.add_expense(trip.id, {"description": "Taxi", "amount": 12.5})
    store.add_expense(trip.id, {"description": "Museum", "amount": 20})
    assert taxi.created_at is not None
    assert store.get_expense_total(trip.id) == 32.5

    store.update_expense(taxi.id, {"amount": 10})
    assert store.get_expense_total(trip.id) == 30

    store.delete_expense(taxi.id)
    assert [e.description for e in store.get_expenses_for_trip(trip.id)] == ["Museum"]

    with pytest.raises(ValidationError):
        store.add_expense(trip.id, {"description": "Refund", "amount": -1})


def test_pinned_places_and_flights(store, trip):
    place = store.add_pinned_place(trip.id, {"name": "Miradouro", "lat": 38.7, "lng": -9.1})
    store.update_pinned_place(place.id, {"address": "Graça"})
    assert store.get_pinned_places_for_trip(trip.id)[0].address == "Graça"
    store.delete_pinned_place(place.id)
    assert store.get_pinned_places_for_trip(trip.id) == []

    flight = store.add_flight(trip.id, {})
    store.update_flight(flight.id, {"seat": "2A"})
    assert store.get_flights_for_trip(trip.id)[0].seat == "2A"


@pytest.mark.asyncio
async def test_add_document(store, trip):
    document = await store.add_document(trip.id, "Visa", b"hi", "text/plain", type="visa")
    assert document.file_url == "data:text/plain;base64,aGk="
    assert store.get_documents_for_trip(trip.id) == [document]

    store.update_document(document.id, {"title": "Visa (scan)"})
    assert store.get_documents_for_trip(trip.id)[0].title == "Visa (scan)"
    store.delete_document(document.id)
    assert store.get_documents_for_trip(trip.id) == []


@pytest.mark.asyncio
async def test_state_survives_restart(storage, store, trip):
    activity = store.add_activity(trip.id, {"dayIndex": 2, "title": "Oceanário"})
    store.add_expense(trip.id, {"description": "Tickets", "amount": 19})

    reloaded = TripStore(storage)
    await reloaded.initialize()

    assert reloaded.loaded
    assert reloaded.get_trips() == [trip]
    assert reloaded.get_activities_for_day(trip.id, 2) == [activity]
    assert reloaded.get_expense_total(trip.id) == 19


def test_local_trips_are_fully_editable(store, trip):
    assert store.can_edit(trip.id)
    assert store.is_owner(trip.id)
    assert not store.can_edit("missing")


def test_create_store_local_only(tmp_path):
    store = create_store(Settings(API_URL="", CLIENT_STORAGE_DIR=str(tmp_path)))
    assert not store.api_backed
    assert store.storage.directory == tmp_path
