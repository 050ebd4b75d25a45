"""
Durable FIFO queue of trip and activity writes made while offline.
"""
import enum
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from tripplanner.core.utils import generate_id
from tripplanner.schemas.base import CamelModel
from tripplanner.schemas.trip import TripCreate, TripUpdate
from tripplanner.schemas.activity import ActivityCreate, ActivityUpdate
from tripplanner.client.api import ApiError, TripApiClient
from tripplanner.client.storage import LocalStorage, QUEUE_KEY

logger = logging.getLogger(__name__)


class QueueOp(str, enum.Enum):
    """Mutation kinds the queue can hold."""
    CREATE_TRIP = "createTrip"
    UPDATE_TRIP = "updateTrip"
    DELETE_TRIP = "deleteTrip"
    CREATE_ACTIVITY = "createActivity"
    UPDATE_ACTIVITY = "updateActivity"
    DELETE_ACTIVITY = "deleteActivity"


class OfflineQueueItem(CamelModel):
    """
    One pending write.

    Payload shapes:
        createTrip:     {optimisticId, input}
        createActivity: {optimisticId, tripId, input}
        update*:        {id, partial}
        delete*:        {id}
    """
    id: str
    op: QueueOp
    payload: Dict[str, Any]


_items_adapter = TypeAdapter(List[OfflineQueueItem])

# Called with (op, optimistic_id, server_record) when a queued create succeeds
OnCreated = Callable[[QueueOp, str, CamelModel], None]


class OfflineQueue:
    """Ordered pending writes, persisted after every change."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.items: List[OfflineQueueItem] = self._load()

    def __len__(self) -> int:
        return len(self.items)

    def _load(self) -> List[OfflineQueueItem]:
        raw = self.storage.get_item(QUEUE_KEY)
        if raw is None:
            return []
        try:
            return _items_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed offline queue: {e.error_count()} errors")
            return []

    def persist(self) -> None:
        self.storage.set_item(QUEUE_KEY, _items_adapter.dump_json(self.items, by_alias=True).decode("utf-8"))

    def enqueue(self, op: QueueOp, payload: Dict[str, Any]) -> OfflineQueueItem:
        item = OfflineQueueItem(id=generate_id(), op=op, payload=payload)
        self.items.append(item)
        self.persist()
        logger.debug(f"Queued {op.value} ({len(self.items)} pending)")
        return item

    def enqueue_create_trip(self, optimistic_id: str, data: TripCreate) -> OfflineQueueItem:
        return self.enqueue(QueueOp.CREATE_TRIP, {"optimisticId": optimistic_id, "input": data.to_payload()})

    def enqueue_create_activity(self, optimistic_id: str, trip_id: str, data: ActivityCreate) -> OfflineQueueItem:
        return self.enqueue(
            QueueOp.CREATE_ACTIVITY,
            {"optimisticId": optimistic_id, "tripId": trip_id, "input": data.to_payload()},
        )

    def enqueue_update(self, op: QueueOp, entity_id: str, partial: CamelModel) -> OfflineQueueItem:
        return self.enqueue(op, {"id": entity_id, "partial": partial.to_payload()})

    def enqueue_delete(self, op: QueueOp, entity_id: str) -> OfflineQueueItem:
        return self.enqueue(op, {"id": entity_id})

    def remap_id(self, old_id: str, new_id: str) -> None:
        """Point pending items at a server-assigned id instead of an optimistic one."""
        changed = False
        for item in self.items:
            for field in ("id", "tripId"):
                if item.payload.get(field) == old_id:
                    item.payload[field] = new_id
                    changed = True
        if changed:
            self.persist()

    async def replay(self, api: TripApiClient, on_created: Optional[OnCreated] = None) -> bool:
        """
        Send queued writes head to tail.

        Identifiers created during this pass are translated for every later
        item. Stops at the first failure, leaving that item and the rest
        queued. Returns True when the queue has been fully drained.
        """
        id_map: Dict[str, str] = {}
        while self.items:
            item = self.items[0]
            try:
                created = await self._execute(api, item, id_map)
            except ApiError as e:
                logger.warning(f"Offline replay halted at {item.op.value} ({len(self.items)} pending): {e}")
                self.persist()
                return False

            logger.debug(f"Replayed {item.op.value} {item.id}")
            self.items.pop(0)
            self.persist()
            if created is not None:
                optimistic_id = item.payload["optimisticId"]
                # Later items keep working if this pass is interrupted
                self.remap_id(optimistic_id, created.id)
                if on_created is not None:
                    on_created(item.op, optimistic_id, created)
        return True

    async def _execute(self, api: TripApiClient, item: OfflineQueueItem, id_map: Dict[str, str]):
        payload = item.payload
        op = item.op

        def resolve(entity_id: str) -> str:
            return id_map.get(entity_id, entity_id)

        if op == QueueOp.CREATE_TRIP:
            trip = await api.create_trip(TripCreate.model_validate(payload["input"]))
            id_map[payload["optimisticId"]] = trip.id
            return trip
        if op == QueueOp.UPDATE_TRIP:
            await api.update_trip(resolve(payload["id"]), TripUpdate.model_validate(payload["partial"]))
        elif op == QueueOp.DELETE_TRIP:
            await api.delete_trip(resolve(payload["id"]))
        elif op == QueueOp.CREATE_ACTIVITY:
            activity = await api.create_activity(
                resolve(payload["tripId"]), ActivityCreate.model_validate(payload["input"])
            )
            id_map[payload["optimisticId"]] = activity.id
            return activity
        elif op == QueueOp.UPDATE_ACTIVITY:
            await api.update_activity(resolve(payload["id"]), ActivityUpdate.model_validate(payload["partial"]))
        elif op == QueueOp.DELETE_ACTIVITY:
            await api.delete_activity(resolve(payload["id"]))
        return None
