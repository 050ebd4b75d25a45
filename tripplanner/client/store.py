"""
Client trip store.

Holds every entity collection in memory and is the only thing that mutates
them. Mutators apply their change immediately and return; in API-backed mode
the matching backend request runs as a background asyncio task whose result
is reconciled into the store when it lands. While offline, trip and activity
writes go to the offline queue and are replayed on reconnect.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Type

from tripplanner.core.config import Settings, settings
from tripplanner.core.utils import date_for_day_index, generate_id, to_data_url, utcnow
from tripplanner.models.trip import TripRole
from tripplanner.schemas.base import CamelModel
from tripplanner.schemas.user import AuthResponse
from tripplanner.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, Day, InviteAcceptResponse, compute_days
)
from tripplanner.schemas.activity import ActivityCreate, ActivityUpdate, ActivityResponse
from tripplanner.schemas.accommodation import AccommodationCreate, AccommodationUpdate, AccommodationResponse
from tripplanner.schemas.attraction import AttractionCreate, AttractionUpdate, AttractionResponse
from tripplanner.schemas.shopping import ShoppingItemCreate, ShoppingItemUpdate, ShoppingItemResponse
from tripplanner.schemas.document import DocumentCreate, DocumentUpdate, DocumentResponse
from tripplanner.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from tripplanner.schemas.place import PinnedPlaceCreate, PinnedPlaceUpdate, PinnedPlaceResponse
from tripplanner.schemas.flight import FlightCreate, FlightUpdate, FlightResponse
from tripplanner.schemas.state import StateSnapshot
from tripplanner.client.api import ApiError, TripApiClient
from tripplanner.client.offline_queue import OfflineQueue, QueueOp
from tripplanner.client.storage import LocalStorage, load_state, save_state

logger = logging.getLogger(__name__)

LOCAL_USER_ID = "local"


@dataclass(frozen=True)
class EntityKind:
    """How one entity type is stored, sent and rolled back."""
    name: str  # suffix of the TripApiClient methods for this type
    collection: str  # StateSnapshot field holding the records
    record: Type[CamelModel]
    create_schema: Type[CamelModel]
    update_schema: Type[CamelModel]
    rollback_on_failure: bool = False
    update_op: Optional[QueueOp] = None
    delete_op: Optional[QueueOp] = None


TRIP = EntityKind(
    "trip", "trips", TripResponse, TripCreate, TripUpdate,
    update_op=QueueOp.UPDATE_TRIP, delete_op=QueueOp.DELETE_TRIP,
)
ACTIVITY = EntityKind(
    "activity", "activities", ActivityResponse, ActivityCreate, ActivityUpdate,
    update_op=QueueOp.UPDATE_ACTIVITY, delete_op=QueueOp.DELETE_ACTIVITY,
)
ACCOMMODATION = EntityKind(
    "accommodation", "accommodations", AccommodationResponse, AccommodationCreate, AccommodationUpdate
)
ATTRACTION = EntityKind("attraction", "attractions", AttractionResponse, AttractionCreate, AttractionUpdate)
SHOPPING_ITEM = EntityKind(
    "shopping_item", "shopping_items", ShoppingItemResponse, ShoppingItemCreate, ShoppingItemUpdate
)
DOCUMENT = EntityKind("document", "documents", DocumentResponse, DocumentCreate, DocumentUpdate)
EXPENSE = EntityKind("expense", "expenses", ExpenseResponse, ExpenseCreate, ExpenseUpdate)
PINNED_PLACE = EntityKind(
    "pinned_place", "pinned_places", PinnedPlaceResponse, PinnedPlaceCreate, PinnedPlaceUpdate,
    rollback_on_failure=True,
)
FLIGHT = EntityKind("flight", "flights", FlightResponse, FlightCreate, FlightUpdate)

CHILD_KINDS = (ACTIVITY, ACCOMMODATION, ATTRACTION, SHOPPING_ITEM, DOCUMENT, EXPENSE, PINNED_PLACE, FLIGHT)


class TripStore:
    """Single source of truth for trip data on the client."""

    def __init__(
        self,
        storage: LocalStorage,
        api: Optional[TripApiClient] = None,
        user_id: Optional[str] = None,
        online: bool = True,
    ):
        """
        Args:
            storage: Device storage for the state blob and the offline queue.
            api: Backend client. None runs the store in local-only mode.
            user_id: Signed-in user, owner of trips created here.
            online: Initial connectivity; see set_online.
        """
        self.storage = storage
        self.api = api
        self.user_id = user_id
        self.online = online
        self.state = StateSnapshot()
        self.queue = OfflineQueue(storage)
        self.loading = False
        self.loaded = False
        self.load_error: Optional[str] = None
        self._tasks: Set[asyncio.Task] = set()
        self._replaying = False
        # optimistic id -> future resolving to the server id (None if the create failed)
        self._pending: Dict[str, asyncio.Future] = {}
        self._resolved: Dict[str, Optional[str]] = {}
        # local edits made while a create was in flight, reapplied on reconcile
        self._unsent_changes: Dict[str, dict] = {}

    @property
    def api_backed(self) -> bool:
        return self.api is not None

    # Internals

    def _records(self, kind: EntityKind) -> list:
        return getattr(self.state, kind.collection)

    def _find(self, kind: EntityKind, entity_id: str):
        for index, record in enumerate(self._records(kind)):
            if record.id == entity_id:
                return index, record
        raise ValueError(f"Unknown {kind.name} {entity_id}")

    def _for_trip(self, kind: EntityKind, trip_id: str) -> list:
        return [record for record in self._records(kind) if record.trip_id == trip_id]

    def _changed(self) -> None:
        if not self.api_backed:
            save_state(self.storage, self.state)

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _check_can_send(self) -> None:
        """Fail before any change when a background request could not be started."""
        if not (self.api_backed and self.online):
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError("API-backed store must be mutated from a running event loop") from None

    async def _resolve_id(self, entity_id: str) -> Optional[str]:
        """Server id for entity_id, waiting for its create if that is still in flight."""
        pending = self._pending.get(entity_id)
        if pending is not None:
            return await pending
        return self._resolved.get(entity_id, entity_id)

    def _add(self, kind: EntityKind, data: Any, trip_id: Optional[str] = None):
        payload = data if isinstance(data, kind.create_schema) else kind.create_schema.model_validate(data)
        if trip_id is not None and self.get_trip(trip_id) is None:
            raise ValueError(f"Unknown trip {trip_id}")
        self._check_can_send()

        fields = payload.model_dump()
        fields["id"] = generate_id()
        if trip_id is not None:
            fields["trip_id"] = trip_id
        now = utcnow()
        for stamp in ("created_at", "updated_at"):
            if stamp in kind.record.model_fields:
                fields[stamp] = now
        if kind is TRIP:
            fields["user_id"] = self.user_id or LOCAL_USER_ID
            if self.api_backed:
                fields["role"] = TripRole.OWNER
        record = kind.record.model_validate(fields)

        self._records(kind).append(record)
        self._changed()

        if not self.api_backed:
            return record
        if self.online:
            self._pending[record.id] = asyncio.get_running_loop().create_future()
            self._spawn(self._send_create(kind, record, payload))
        elif kind is TRIP:
            self.queue.enqueue_create_trip(record.id, payload)
        elif kind is ACTIVITY:
            self.queue.enqueue_create_activity(record.id, trip_id, payload)
        else:
            logger.warning(f"Offline: {kind.name} {record.id} was not sent")
            self._create_failed(kind, record.id)
        return record

    async def _send_create(self, kind: EntityKind, record, payload) -> None:
        server_id = None
        try:
            server_id = await self._create_remote(kind, record, payload)
        finally:
            self._resolved[record.id] = server_id
            pending = self._pending.pop(record.id, None)
            if pending is not None and not pending.done():
                pending.set_result(server_id)

    async def _create_remote(self, kind: EntityKind, record, payload) -> Optional[str]:
        create = getattr(self.api, f"create_{kind.name}")
        try:
            if kind is TRIP:
                saved = await create(payload)
            else:
                trip_id = await self._resolve_id(record.trip_id)
                if trip_id is None:
                    raise ApiError(f"Trip {record.trip_id} was not saved")
                saved = await create(trip_id, payload)
        except ApiError as e:
            logger.warning(f"Could not create {kind.name} {record.id}: {e}")
            self._unsent_changes.pop(record.id, None)
            self._create_failed(kind, record.id)
            return None
        self._reconcile(kind, record.id, saved)
        return saved.id

    def _create_failed(self, kind: EntityKind, entity_id: str) -> None:
        if not kind.rollback_on_failure:
            return
        records = self._records(kind)
        records[:] = [record for record in records if record.id != entity_id]
        self._changed()

    def _reconcile(self, kind: EntityKind, old_id: str, saved) -> None:
        """Swap an optimistic record for the server's version of it."""
        changes = self._unsent_changes.pop(old_id, None)
        records = self._records(kind)
        for index, record in enumerate(records):
            if record.id == old_id:
                if changes:
                    saved = kind.record.model_validate({**saved.model_dump(), **changes})
                records[index] = saved
                break
        else:
            logger.debug(f"{kind.name} {old_id} is gone; dropping server copy")
        if saved.id != old_id:
            self._remap_id(kind, old_id, saved.id)
        self._changed()

    def _remap_id(self, kind: EntityKind, old_id: str, new_id: str) -> None:
        if kind is TRIP:
            for child in CHILD_KINDS:
                records = self._records(child)
                records[:] = [
                    record.model_copy(update={"trip_id": new_id}) if record.trip_id == old_id else record
                    for record in records
                ]
        self.queue.remap_id(old_id, new_id)

    def _on_replayed_create(self, op: QueueOp, optimistic_id: str, saved) -> None:
        self._reconcile(TRIP if op == QueueOp.CREATE_TRIP else ACTIVITY, optimistic_id, saved)

    def _update(self, kind: EntityKind, entity_id: str, partial: Any) -> None:
        index, record = self._find(kind, entity_id)
        changes = partial if isinstance(partial, kind.update_schema) else kind.update_schema.model_validate(partial)
        merged = {**record.model_dump(), **changes.model_dump(exclude_unset=True)}
        if "updated_at" in kind.record.model_fields:
            merged["updated_at"] = utcnow()
        updated = kind.record.model_validate(merged)
        self._check_can_send()

        self._records(kind)[index] = updated
        if entity_id in self._pending:
            self._unsent_changes.setdefault(entity_id, {}).update(changes.model_dump(exclude_unset=True))
        self._changed()

        if not self.api_backed:
            return
        if self.online:
            self._spawn(self._send_update(kind, entity_id, changes))
        elif kind.update_op is not None:
            self.queue.enqueue_update(kind.update_op, entity_id, changes)
        else:
            logger.warning(f"Offline: update of {kind.name} {entity_id} was not sent")

    async def _send_update(self, kind: EntityKind, entity_id: str, changes) -> None:
        target = await self._resolve_id(entity_id)
        if target is None:
            logger.warning(f"Not updating {kind.name} {entity_id}: it was never saved")
            return
        update = getattr(self.api, f"update_{kind.name}")
        try:
            saved = await update(target, changes)
        except ApiError as e:
            logger.warning(f"Could not update {kind.name} {target}: {e}")
            return
        records = self._records(kind)
        for index, record in enumerate(records):
            if record.id == saved.id:
                records[index] = saved
                break

    def _delete(self, kind: EntityKind, entity_id: str) -> None:
        index, _ = self._find(kind, entity_id)
        self._check_can_send()
        del self._records(kind)[index]
        if kind is TRIP:
            for child in CHILD_KINDS:
                records = self._records(child)
                records[:] = [record for record in records if record.trip_id != entity_id]
        self._changed()

        if not self.api_backed:
            return
        if self.online:
            self._spawn(self._send_delete(kind, entity_id))
        elif kind.delete_op is not None:
            self.queue.enqueue_delete(kind.delete_op, entity_id)
        else:
            logger.warning(f"Offline: delete of {kind.name} {entity_id} was not sent")

    async def _send_delete(self, kind: EntityKind, entity_id: str) -> None:
        target = await self._resolve_id(entity_id)
        if target is None:
            logger.debug(f"{kind.name} {entity_id} was never saved; nothing to delete")
            return
        try:
            await getattr(self.api, f"delete_{kind.name}")(target)
        except ApiError as e:
            logger.warning(f"Could not delete {kind.name} {target}: {e}")

    # Loading and connectivity

    async def initialize(self) -> None:
        """
        Load initial data.

        Local-only mode reads the persisted blob. API-backed mode fetches the
        full snapshot and, once that succeeded, replays the offline queue.
        """
        if not self.api_backed:
            saved = load_state(self.storage)
            if saved is not None:
                self.state = saved
            self.loaded = True
            return
        if await self.refresh():
            await self.flush_offline_queue()

    async def refresh(self) -> bool:
        """Replace every collection with the backend snapshot. False if it could not be fetched."""
        if not self.online:
            self.load_error = "offline"
            return False
        self.loading = True
        try:
            snapshot = await self.api.get_state()
        except ApiError as e:
            logger.warning(f"Could not load trips: {e}")
            self.load_error = e.message
            return False
        finally:
            self.loading = False
        self.state = snapshot
        self.loaded = True
        self.load_error = None
        logger.info(f"Loaded {len(snapshot.trips)} trips")
        return True

    async def flush_offline_queue(self) -> bool:
        """Replay queued writes; on a full drain resynchronize with the backend."""
        if self._replaying or not self.online or not self.api_backed:
            return False
        if not self.queue:
            return True
        self._replaying = True
        try:
            drained = await self.queue.replay(self.api, on_created=self._on_replayed_create)
        finally:
            self._replaying = False
        if drained:
            await self.refresh()
        return drained

    async def sync(self) -> None:
        """Bring the store up to date after connectivity returns."""
        if not self.loaded:
            await self.initialize()
        elif self.queue:
            await self.flush_offline_queue()
        else:
            await self.refresh()

    def set_online(self, online: bool) -> None:
        """Connectivity signal. Going back online replays the queue and refreshes."""
        was_online = self.online
        self.online = online
        if online and not was_online and self.api_backed:
            self._spawn(self.sync())

    async def wait_idle(self) -> None:
        """Wait for every background request, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def close(self) -> None:
        await self.wait_idle()
        if self.api is not None:
            await self.api.close()

    def _require_api(self) -> TripApiClient:
        if self.api is None:
            raise RuntimeError("Store is running in local-only mode")
        return self.api

    async def login(self, email: str, password: str) -> AuthResponse:
        auth = await self._require_api().login(email, password)
        self.user_id = auth.user.id
        await self.initialize()
        return auth

    async def register(self, email: str, password: str, name: Optional[str] = None) -> AuthResponse:
        auth = await self._require_api().register(email, password, name)
        self.user_id = auth.user.id
        await self.initialize()
        return auth

    async def accept_invite(self, token: str) -> InviteAcceptResponse:
        """Join a trip through an invite token, then reload everything."""
        result = await self._require_api().accept_invite(token)
        await self.refresh()
        return result

    # Trips

    def get_trips(self) -> List[TripResponse]:
        return list(self.state.trips)

    def get_trip(self, trip_id: str) -> Optional[TripResponse]:
        return next((trip for trip in self.state.trips if trip.id == trip_id), None)

    def add_trip(self, data) -> TripResponse:
        return self._add(TRIP, data)

    def update_trip(self, trip_id: str, partial) -> None:
        self._update(TRIP, trip_id, partial)

    def delete_trip(self, trip_id: str) -> None:
        """Remove the trip and everything that belongs to it."""
        self._delete(TRIP, trip_id)

    def get_days(self, trip: TripResponse) -> List[Day]:
        return compute_days(trip)

    def can_edit(self, trip_id: str) -> bool:
        trip = self.get_trip(trip_id)
        return trip is not None and trip.role in (None, TripRole.OWNER, TripRole.PARTICIPANT)

    def is_owner(self, trip_id: str) -> bool:
        trip = self.get_trip(trip_id)
        return trip is not None and trip.role in (None, TripRole.OWNER)

    # Activities

    def get_activities_for_trip(self, trip_id: str) -> List[ActivityResponse]:
        return self._for_trip(ACTIVITY, trip_id)

    def get_activities_for_day(self, trip_id: str, day_index: int) -> List[ActivityResponse]:
        activities = [a for a in self._for_trip(ACTIVITY, trip_id) if a.day_index == day_index]
        return sorted(activities, key=lambda a: a.order)

    def add_activity(self, trip_id: str, data) -> ActivityResponse:
        return self._add(ACTIVITY, data, trip_id)

    def update_activity(self, activity_id: str, partial) -> None:
        self._update(ACTIVITY, activity_id, partial)

    def delete_activity(self, activity_id: str) -> None:
        self._delete(ACTIVITY, activity_id)

    def reorder_activities(self, trip_id: str, day_index: int, ordered_ids: List[str]) -> None:
        """Give the day's activities order 0..n-1 following ordered_ids."""
        current = [a.id for a in self.get_activities_for_day(trip_id, day_index)]
        if sorted(current) != sorted(ordered_ids):
            raise ValueError("ordered_ids must list every activity of the day exactly once")
        for order, activity_id in enumerate(ordered_ids):
            _, activity = self._find(ACTIVITY, activity_id)
            if activity.order != order:
                self.update_activity(activity_id, {"order": order})

    # Accommodations

    def get_accommodations_for_trip(self, trip_id: str) -> List[AccommodationResponse]:
        return self._for_trip(ACCOMMODATION, trip_id)

    def get_accommodation_for_day(self, trip_id: str, day_index: int) -> Optional[AccommodationResponse]:
        """First accommodation (in insertion order) whose stay covers the day."""
        trip = self.get_trip(trip_id)
        if trip is None:
            return None
        day = date_for_day_index(trip.start_date, day_index)
        return next((a for a in self._for_trip(ACCOMMODATION, trip_id) if a.covers(day)), None)

    def add_accommodation(self, trip_id: str, data) -> AccommodationResponse:
        return self._add(ACCOMMODATION, data, trip_id)

    def update_accommodation(self, accommodation_id: str, partial) -> None:
        self._update(ACCOMMODATION, accommodation_id, partial)

    def delete_accommodation(self, accommodation_id: str) -> None:
        self._delete(ACCOMMODATION, accommodation_id)

    # Attractions

    def get_attractions_for_trip(self, trip_id: str) -> List[AttractionResponse]:
        return self._for_trip(ATTRACTION, trip_id)

    def get_attractions_for_day(self, trip_id: str, day_index: int) -> List[AttractionResponse]:
        return [a for a in self._for_trip(ATTRACTION, trip_id) if day_index in a.day_indexes]

    def add_attraction(self, trip_id: str, data) -> AttractionResponse:
        return self._add(ATTRACTION, data, trip_id)

    def update_attraction(self, attraction_id: str, partial) -> None:
        self._update(ATTRACTION, attraction_id, partial)

    def delete_attraction(self, attraction_id: str) -> None:
        self._delete(ATTRACTION, attraction_id)

    # Shopping list

    def get_shopping_items_for_trip(self, trip_id: str) -> List[ShoppingItemResponse]:
        return sorted(self._for_trip(SHOPPING_ITEM, trip_id), key=lambda item: item.order)

    def add_shopping_item(self, trip_id: str, data) -> ShoppingItemResponse:
        return self._add(SHOPPING_ITEM, data, trip_id)

    def update_shopping_item(self, item_id: str, partial) -> None:
        self._update(SHOPPING_ITEM, item_id, partial)

    def toggle_shopping_item(self, item_id: str) -> None:
        _, item = self._find(SHOPPING_ITEM, item_id)
        self.update_shopping_item(item_id, {"done": not item.done})

    def delete_shopping_item(self, item_id: str) -> None:
        self._delete(SHOPPING_ITEM, item_id)

    def reorder_shopping_items(self, trip_id: str, ordered_ids: List[str]) -> None:
        current = [item.id for item in self._for_trip(SHOPPING_ITEM, trip_id)]
        if sorted(current) != sorted(ordered_ids):
            raise ValueError("ordered_ids must list every shopping item of the trip exactly once")
        for order, item_id in enumerate(ordered_ids):
            _, item = self._find(SHOPPING_ITEM, item_id)
            if item.order != order:
                self.update_shopping_item(item_id, {"order": order})

    # Documents

    def get_documents_for_trip(self, trip_id: str) -> List[DocumentResponse]:
        return self._for_trip(DOCUMENT, trip_id)

    async def add_document(
        self,
        trip_id: str,
        title: str,
        content: bytes,
        mime_type: str,
        type: Optional[str] = None,
    ) -> DocumentResponse:
        """
        Attach a file to a trip as a data URL.

        Unlike the other mutators this waits for the backend in API-backed
        mode and raises ApiError if the upload is rejected or cannot be sent.
        """
        data = DocumentCreate(title=title, type=type, file_url=to_data_url(content, mime_type))
        if not self.api_backed:
            return self._add(DOCUMENT, data, trip_id)
        if self.get_trip(trip_id) is None:
            raise ValueError(f"Unknown trip {trip_id}")
        if not self.online:
            raise ApiError("Offline: document was not uploaded")

        server_trip_id = await self._resolve_id(trip_id)
        if server_trip_id is None:
            raise ApiError(f"Trip {trip_id} was not saved")
        saved = await self.api.create_document(server_trip_id, data)
        self.state.documents.append(saved)
        return saved

    def update_document(self, document_id: str, partial) -> None:
        self._update(DOCUMENT, document_id, partial)

    def delete_document(self, document_id: str) -> None:
        self._delete(DOCUMENT, document_id)

    # Expenses

    def get_expenses_for_trip(self, trip_id: str) -> List[ExpenseResponse]:
        return self._for_trip(EXPENSE, trip_id)

    def get_expense_total(self, trip_id: str) -> float:
        return sum(expense.amount for expense in self._for_trip(EXPENSE, trip_id))

    def add_expense(self, trip_id: str, data) -> ExpenseResponse:
        return self._add(EXPENSE, data, trip_id)

    def update_expense(self, expense_id: str, partial) -> None:
        self._update(EXPENSE, expense_id, partial)

    def delete_expense(self, expense_id: str) -> None:
        self._delete(EXPENSE, expense_id)

    # Pinned places

    def get_pinned_places_for_trip(self, trip_id: str) -> List[PinnedPlaceResponse]:
        return self._for_trip(PINNED_PLACE, trip_id)

    def add_pinned_place(self, trip_id: str, data) -> PinnedPlaceResponse:
        return self._add(PINNED_PLACE, data, trip_id)

    def update_pinned_place(self, place_id: str, partial) -> None:
        self._update(PINNED_PLACE, place_id, partial)

    def delete_pinned_place(self, place_id: str) -> None:
        self._delete(PINNED_PLACE, place_id)

    # Flights

    def get_flights_for_trip(self, trip_id: str) -> List[FlightResponse]:
        return self._for_trip(FLIGHT, trip_id)

    def add_flight(self, trip_id: str, data) -> FlightResponse:
        return self._add(FLIGHT, data, trip_id)

    def update_flight(self, flight_id: str, partial) -> None:
        self._update(FLIGHT, flight_id, partial)

    def delete_flight(self, flight_id: str) -> None:
        self._delete(FLIGHT, flight_id)


def create_store(config: Settings = settings, transport=None) -> TripStore:
    """Build the store once at startup: API-backed when API_URL is set, local-only otherwise."""
    storage = LocalStorage(config.CLIENT_STORAGE_DIR)
    api = TripApiClient(config.API_URL, transport=transport) if config.API_URL else None
    return TripStore(storage, api)
