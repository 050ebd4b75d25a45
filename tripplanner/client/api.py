"""
Async HTTP client for the Trip Planner backend.
"""
import logging
from typing import Any, List, Optional

import httpx

from tripplanner.models.trip import TripRole
from tripplanner.schemas.base import CamelModel
from tripplanner.schemas.user import AuthResponse, UserResponse
from tripplanner.schemas.trip import (
    TripResponse, TripMemberResponse, InviteTokenResponse, InviteAcceptResponse
)
from tripplanner.schemas.activity import ActivityResponse
from tripplanner.schemas.accommodation import AccommodationResponse
from tripplanner.schemas.attraction import AttractionResponse
from tripplanner.schemas.shopping import ShoppingItemResponse
from tripplanner.schemas.document import DocumentResponse
from tripplanner.schemas.expense import ExpenseResponse
from tripplanner.schemas.place import PinnedPlaceResponse
from tripplanner.schemas.flight import FlightResponse
from tripplanner.schemas.state import StateSnapshot, SharedTripResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request that failed on the network or was rejected by the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _body(data: Any) -> Any:
    if isinstance(data, CamelModel):
        return data.to_payload()
    return data


class TripApiClient:
    """Async client for every backend endpoint the trip store relies on."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Backend address, e.g. "http://localhost:8000".
            token: Bearer token from a previous login, if any.
            transport: Custom httpx transport (tests pass an ASGI transport).
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the HTTP client. Requests never time out on the client side."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=None,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TripApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    async def _request(self, method: str, path: str, json: Any = None, auth: bool = True) -> Any:
        headers = {}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self.client.request(method, path, json=_body(json), headers=headers)
        except httpx.TransportError as e:
            logger.debug(f"{method} {path} failed: {e}")
            raise ApiError(f"Cannot reach the server: {e}") from e

        if response.status_code == 204:
            return None
        try:
            data = response.json()
        except ValueError:
            raise ApiError(response.reason_phrase or "Server error", response.status_code)

        if response.is_error:
            detail = data.get("detail") if isinstance(data, dict) else None
            raise ApiError(str(detail or response.reason_phrase), response.status_code)
        return data

    async def _list(self, path: str, schema) -> list:
        return [schema.model_validate(item) for item in await self._request("GET", path)]

    async def _send(self, method: str, path: str, body: Any, schema):
        return schema.model_validate(await self._request(method, path, json=body))

    # Auth

    async def register(self, email: str, password: str, name: Optional[str] = None) -> AuthResponse:
        auth = await self._send(
            "POST", "/api/auth/register", {"email": email, "password": password, "name": name}, AuthResponse
        )
        self.set_token(auth.token)
        return auth

    async def login(self, email: str, password: str) -> AuthResponse:
        auth = await self._send("POST", "/api/auth/login", {"email": email, "password": password}, AuthResponse)
        self.set_token(auth.token)
        return auth

    async def get_me(self) -> UserResponse:
        return UserResponse.model_validate(await self._request("GET", "/api/users/me"))

    async def update_profile(self, name: Optional[str]) -> UserResponse:
        return await self._send("PATCH", "/api/users/me", {"name": name}, UserResponse)

    async def get_state(self) -> StateSnapshot:
        return StateSnapshot.model_validate(await self._request("GET", "/api/state"))

    # Trips

    async def get_trips(self) -> List[TripResponse]:
        return await self._list("/api/trips", TripResponse)

    async def get_trip(self, trip_id: str) -> TripResponse:
        return TripResponse.model_validate(await self._request("GET", f"/api/trips/{trip_id}"))

    async def create_trip(self, body) -> TripResponse:
        return await self._send("POST", "/api/trips", body, TripResponse)

    async def update_trip(self, trip_id: str, body) -> TripResponse:
        return await self._send("PUT", f"/api/trips/{trip_id}", body, TripResponse)

    async def delete_trip(self, trip_id: str) -> None:
        await self._request("DELETE", f"/api/trips/{trip_id}")

    # Sharing and collaboration

    async def create_share_token(self, trip_id: str) -> str:
        data = await self._request("POST", f"/api/trips/{trip_id}/share")
        return data["shareToken"]

    async def get_shared_trip(self, token: str) -> SharedTripResponse:
        """Public read-only view; sent without credentials."""
        return SharedTripResponse.model_validate(await self._request("GET", f"/api/share/{token}", auth=False))

    async def get_trip_members(self, trip_id: str) -> List[TripMemberResponse]:
        data = await self._request("GET", f"/api/trips/{trip_id}/members")
        return [TripMemberResponse.model_validate(m) for m in data["members"]]

    async def invite_trip_member(self, trip_id: str, email: str, role: TripRole) -> TripMemberResponse:
        data = await self._request(
            "POST", f"/api/trips/{trip_id}/members", json={"email": email, "role": TripRole(role).value}
        )
        return TripMemberResponse.model_validate(data["member"])

    async def update_trip_member_role(self, trip_id: str, user_id: str, role: TripRole) -> TripMemberResponse:
        data = await self._request(
            "PATCH", f"/api/trips/{trip_id}/members/{user_id}", json={"role": TripRole(role).value}
        )
        return TripMemberResponse.model_validate(data["member"])

    async def remove_trip_member(self, trip_id: str, user_id: str) -> None:
        await self._request("DELETE", f"/api/trips/{trip_id}/members/{user_id}")

    async def create_invite(self, trip_id: str, role: TripRole) -> InviteTokenResponse:
        return await self._send(
            "POST", f"/api/trips/{trip_id}/invites", {"role": TripRole(role).value}, InviteTokenResponse
        )

    async def accept_invite(self, token: str) -> InviteAcceptResponse:
        return await self._send("POST", f"/api/invites/{token}/accept", None, InviteAcceptResponse)

    # Activities

    async def get_activities(self, trip_id: str) -> List[ActivityResponse]:
        return await self._list(f"/api/trips/{trip_id}/activities", ActivityResponse)

    async def create_activity(self, trip_id: str, body) -> ActivityResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/activities", body, ActivityResponse)

    async def update_activity(self, activity_id: str, body) -> ActivityResponse:
        return await self._send("PUT", f"/api/activities/{activity_id}", body, ActivityResponse)

    async def delete_activity(self, activity_id: str) -> None:
        await self._request("DELETE", f"/api/activities/{activity_id}")

    # Accommodations

    async def get_accommodations(self, trip_id: str) -> List[AccommodationResponse]:
        return await self._list(f"/api/trips/{trip_id}/accommodations", AccommodationResponse)

    async def create_accommodation(self, trip_id: str, body) -> AccommodationResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/accommodations", body, AccommodationResponse)

    async def update_accommodation(self, accommodation_id: str, body) -> AccommodationResponse:
        return await self._send("PUT", f"/api/accommodations/{accommodation_id}", body, AccommodationResponse)

    async def delete_accommodation(self, accommodation_id: str) -> None:
        await self._request("DELETE", f"/api/accommodations/{accommodation_id}")

    # Attractions

    async def get_attractions(self, trip_id: str) -> List[AttractionResponse]:
        return await self._list(f"/api/trips/{trip_id}/attractions", AttractionResponse)

    async def create_attraction(self, trip_id: str, body) -> AttractionResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/attractions", body, AttractionResponse)

    async def update_attraction(self, attraction_id: str, body) -> AttractionResponse:
        return await self._send("PUT", f"/api/attractions/{attraction_id}", body, AttractionResponse)

    async def delete_attraction(self, attraction_id: str) -> None:
        await self._request("DELETE", f"/api/attractions/{attraction_id}")

    # Shopping list

    async def get_shopping_items(self, trip_id: str) -> List[ShoppingItemResponse]:
        return await self._list(f"/api/trips/{trip_id}/shopping", ShoppingItemResponse)

    async def create_shopping_item(self, trip_id: str, body) -> ShoppingItemResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/shopping", body, ShoppingItemResponse)

    async def update_shopping_item(self, item_id: str, body) -> ShoppingItemResponse:
        return await self._send("PATCH", f"/api/shopping/{item_id}", body, ShoppingItemResponse)

    async def toggle_shopping_item(self, item_id: str, done: bool) -> ShoppingItemResponse:
        return await self.update_shopping_item(item_id, {"done": done})

    async def delete_shopping_item(self, item_id: str) -> None:
        await self._request("DELETE", f"/api/shopping/{item_id}")

    # Documents

    async def get_documents(self, trip_id: str) -> List[DocumentResponse]:
        return await self._list(f"/api/trips/{trip_id}/documents", DocumentResponse)

    async def create_document(self, trip_id: str, body) -> DocumentResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/documents", body, DocumentResponse)

    async def update_document(self, document_id: str, body) -> DocumentResponse:
        return await self._send("PUT", f"/api/documents/{document_id}", body, DocumentResponse)

    async def delete_document(self, document_id: str) -> None:
        await self._request("DELETE", f"/api/documents/{document_id}")

    # Expenses

    async def get_expenses(self, trip_id: str) -> List[ExpenseResponse]:
        return await self._list(f"/api/trips/{trip_id}/expenses", ExpenseResponse)

    async def create_expense(self, trip_id: str, body) -> ExpenseResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/expenses", body, ExpenseResponse)

    async def update_expense(self, expense_id: str, body) -> ExpenseResponse:
        return await self._send("PUT", f"/api/expenses/{expense_id}", body, ExpenseResponse)

    async def delete_expense(self, expense_id: str) -> None:
        await self._request("DELETE", f"/api/expenses/{expense_id}")

    # Pinned places

    async def get_pinned_places(self, trip_id: str) -> List[PinnedPlaceResponse]:
        return await self._list(f"/api/trips/{trip_id}/pinned-places", PinnedPlaceResponse)

    async def create_pinned_place(self, trip_id: str, body) -> PinnedPlaceResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/pinned-places", body, PinnedPlaceResponse)

    async def update_pinned_place(self, place_id: str, body) -> PinnedPlaceResponse:
        return await self._send("PUT", f"/api/pinned-places/{place_id}", body, PinnedPlaceResponse)

    async def delete_pinned_place(self, place_id: str) -> None:
        await self._request("DELETE", f"/api/pinned-places/{place_id}")

    # Flights

    async def get_flights(self, trip_id: str) -> List[FlightResponse]:
        return await self._list(f"/api/trips/{trip_id}/flights", FlightResponse)

    async def create_flight(self, trip_id: str, body) -> FlightResponse:
        return await self._send("POST", f"/api/trips/{trip_id}/flights", body, FlightResponse)

    async def update_flight(self, flight_id: str, body) -> FlightResponse:
        return await self._send("PUT", f"/api/flights/{flight_id}", body, FlightResponse)

    async def delete_flight(self, flight_id: str) -> None:
        await self._request("DELETE", f"/api/flights/{flight_id}")
