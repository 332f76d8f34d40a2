"""
Async HTTP client for the Event Planner API.

Mirrors what the mobile app calls. Each method returns the envelope's
`data` and raises EventPlannerAPIError when the server answers
`success: false`.

    async with EventPlannerClient("http://localhost:8000") as api:
        event = await api.create_event({"name": "Gala", ...})
        await api.add_guest({"eventId": event["id"], "name": "Amy"})
"""

from typing import Any, Optional

import httpx


class EventPlannerAPIError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[list[str]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class EventPlannerClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_prefix: str = "/api",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._prefix = api_prefix.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "EventPlannerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        response = await self._client.request(method, f"{self._prefix}{path}", **kwargs)
        try:
            body = response.json()
        except ValueError:
            raise EventPlannerAPIError(response.status_code, response.text or "Invalid response")
        if not body.get("success", False):
            raise EventPlannerAPIError(response.status_code, body.get("message", ""), body.get("errors"))
        return body

    async def _data(self, method: str, path: str, **kwargs) -> Any:
        return (await self._request(method, path, **kwargs)).get("data")

    # Events

    async def list_events(self, status: Optional[str] = None, upcoming: bool = False) -> list[dict]:
        params: dict[str, Any] = {}
        if status:
            params["status"] = status
        if upcoming:
            params["upcoming"] = "true"
        return await self._data("GET", "/events", params=params)

    async def get_event(self, event_id: int) -> dict:
        return await self._data("GET", f"/events/{event_id}")

    async def get_event_details(self, event_id: int) -> dict:
        return await self._data("GET", f"/events/{event_id}/details")

    async def get_event_stats(self, event_id: int) -> dict:
        return await self._data("GET", f"/events/{event_id}/stats")

    async def create_event(self, event: dict) -> dict:
        return await self._data("POST", "/events", json=event)

    async def update_event(self, event_id: int, event: dict) -> dict:
        return await self._data("PUT", f"/events/{event_id}", json=event)

    async def update_event_status(self, event_id: int, status: str) -> dict:
        return await self._data("PATCH", f"/events/{event_id}/status", json={"status": status})

    async def delete_event(self, event_id: int) -> dict:
        return await self._data("DELETE", f"/events/{event_id}")

    # Guests

    async def list_guests(self, event_id: int, rsvp_status: Optional[str] = None) -> list[dict]:
        params = {"rsvpStatus": rsvp_status} if rsvp_status else {}
        return await self._data("GET", f"/guests/event/{event_id}", params=params)

    async def get_guest(self, guest_id: int) -> dict:
        return await self._data("GET", f"/guests/{guest_id}")

    async def get_guest_stats(self, event_id: int) -> dict:
        return await self._data("GET", f"/guests/event/{event_id}/stats")

    async def add_guest(self, guest: dict) -> dict:
        return await self._data("POST", "/guests", json=guest)

    async def add_guests_bulk(self, event_id: int, guests: list[dict]) -> list[dict]:
        return await self._data("POST", "/guests/bulk", json={"eventId": event_id, "guests": guests})

    async def update_guest(self, guest_id: int, guest: dict) -> dict:
        return await self._data("PUT", f"/guests/{guest_id}", json=guest)

    async def update_guest_rsvp(self, guest_id: int, rsvp_status: str) -> dict:
        return await self._data("PATCH", f"/guests/{guest_id}/rsvp", json={"rsvpStatus": rsvp_status})

    async def delete_guest(self, guest_id: int) -> dict:
        return await self._data("DELETE", f"/guests/{guest_id}")

    async def delete_all_guests(self, event_id: int) -> int:
        return (await self._request("DELETE", f"/guests/event/{event_id}/all"))["count"]

    # Vendors

    async def list_vendors(
        self,
        event_id: int,
        category: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[dict]:
        params = {key: value for key, value in (("category", category), ("status", status)) if value}
        return await self._data("GET", f"/vendors/event/{event_id}", params=params)

    async def get_vendor(self, vendor_id: int) -> dict:
        return await self._data("GET", f"/vendors/{vendor_id}")

    async def get_vendors_by_category(self, event_id: int, category: str) -> list[dict]:
        return await self._data("GET", f"/vendors/event/{event_id}/category/{category}")

    async def get_vendor_stats(self, event_id: int) -> dict:
        return await self._data("GET", f"/vendors/event/{event_id}/stats")

    async def add_vendor(self, vendor: dict) -> dict:
        return await self._data("POST", "/vendors", json=vendor)

    async def add_vendors_bulk(self, event_id: int, vendors: list[dict]) -> list[dict]:
        return await self._data("POST", "/vendors/bulk", json={"eventId": event_id, "vendors": vendors})

    async def update_vendor(self, vendor_id: int, vendor: dict) -> dict:
        return await self._data("PUT", f"/vendors/{vendor_id}", json=vendor)

    async def update_vendor_status(self, vendor_id: int, status: str) -> dict:
        return await self._data("PATCH", f"/vendors/{vendor_id}/status", json={"status": status})

    async def update_vendor_contract(self, vendor_id: int, **changes: Any) -> dict:
        """Keyword arguments: contractSigned, depositPaid, depositAmount."""
        return await self._data("PATCH", f"/vendors/{vendor_id}/contract", json=changes)

    async def delete_vendor(self, vendor_id: int) -> dict:
        return await self._data("DELETE", f"/vendors/{vendor_id}")

    async def delete_all_vendors(self, event_id: int) -> int:
        return (await self._request("DELETE", f"/vendors/event/{event_id}/all"))["count"]
