"""
Tests for the async API client, run against the app in-process.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from eventplanner.client import EventPlannerAPIError, EventPlannerClient


@pytest_asyncio.fixture
async def api(client: AsyncClient):
    async with EventPlannerClient(http_client=client) as planner:
        yield planner


@pytest.mark.asyncio
async def test_planning_flow(api: EventPlannerClient, event_data):
    event = await api.create_event(event_data(name="Launch Party"))
    assert event["guestCount"] == 0

    guest = await api.add_guest({"eventId": event["id"], "name": "Amy", "plusOne": True})
    await api.add_guests_bulk(event["id"], [{"name": "Rory"}, {"name": "Clara"}])
    await api.update_guest_rsvp(guest["id"], "confirmed")

    vendor = await api.add_vendor(
        {"eventId": event["id"], "name": "Hall", "category": "venue", "phone": "1", "quotedPrice": 900}
    )
    await api.update_vendor_status(vendor["id"], "booked")
    secured = await api.update_vendor_contract(vendor["id"], contractSigned=True, depositPaid=True)
    assert secured["isSecured"] is True

    stats = await api.get_event_stats(event["id"])
    assert stats["guests"] == {"total": 3, "confirmed": 1, "pending": 2}
    assert stats["vendors"] == {"total": 1, "booked": 1, "researching": 0}

    guest_stats = await api.get_guest_stats(event["id"])
    assert guest_stats["estimatedAttendees"] == 2

    refreshed = await api.get_event(event["id"])
    assert refreshed["guestCount"] == 3
    assert refreshed["vendorCount"] == 1

    deleted = await api.delete_event(event["id"])
    assert deleted == {"deletedEvent": "Launch Party", "guestsDeleted": 3, "vendorsDeleted": 1}


@pytest.mark.asyncio
async def test_listing_helpers(api: EventPlannerClient, test_event, test_guest, test_vendor):
    assert [e["id"] for e in await api.list_events(upcoming=True)] == [test_event.id]
    assert [g["id"] for g in await api.list_guests(test_event.id, rsvp_status="pending")] == [test_guest.id]
    assert await api.list_vendors(test_event.id, category="venue") == []
    assert len(await api.get_vendors_by_category(test_event.id, "florist")) == 1
    assert await api.delete_all_guests(test_event.id) == 1
    assert await api.delete_all_vendors(test_event.id) == 1


@pytest.mark.asyncio
async def test_error_carries_status_and_messages(api: EventPlannerClient, test_event):
    with pytest.raises(EventPlannerAPIError) as exc_info:
        await api.add_guest({"eventId": test_event.id, "name": ""})
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Validation error"
    assert exc_info.value.errors == ["Guest name is required"]

    with pytest.raises(EventPlannerAPIError) as exc_info:
        await api.get_vendor(99999)
    assert exc_info.value.status_code == 404
    assert exc_info.value.errors == []
