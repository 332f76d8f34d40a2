"""
Tests for event CRUD endpoints and the cascading delete.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from httpx import AsyncClient
from sqlalchemy import select, func

from eventplanner.models import Event, Guest, Vendor


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient, event_data):
    """New events start in planning with both counters at zero."""
    response = await client.post("/api/events", json=event_data(name="Python Conference 2026"))
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Event created successfully"
    data = body["data"]
    assert data["name"] == "Python Conference 2026"
    assert data["status"] == "planning"
    assert data["guestCount"] == 0
    assert data["vendorCount"] == 0
    assert data["isUpcoming"] is True
    assert data["description"] is None


@pytest.mark.asyncio
async def test_create_event_ignores_client_counters(client: AsyncClient, event_data):
    response = await client.post("/api/events", json=event_data(guestCount=50, vendorCount=7))
    assert response.status_code == 201
    assert response.json()["data"]["guestCount"] == 0
    assert response.json()["data"]["vendorCount"] == 0


@pytest.mark.asyncio
async def test_create_event_trims_and_blanks(client: AsyncClient, event_data):
    response = await client.post(
        "/api/events",
        json=event_data(name="  Gala  ", description="   "),
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Gala"
    assert data["description"] is None


@pytest.mark.asyncio
async def test_create_event_missing_fields(client: AsyncClient):
    """Every violated field is reported, not just the first."""
    response = await client.post("/api/events", json={"name": ""})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert "Event name is required" in body["errors"]
    assert "Event date is required" in body["errors"]
    assert "Event time is required" in body["errors"]
    assert "Location is required" in body["errors"]


@pytest.mark.asyncio
async def test_create_event_negative_budget(client: AsyncClient, event_data):
    response = await client.post("/api/events", json=event_data(budget=-1))
    assert response.status_code == 400
    assert response.json()["errors"] == ["Budget cannot be negative"]


@pytest.mark.asyncio
async def test_create_event_invalid_status(client: AsyncClient, event_data):
    response = await client.post("/api/events", json=event_data(status="postponed"))
    assert response.status_code == 400
    assert response.json()["errors"][0].startswith("Status must be one of")


@pytest.mark.asyncio
async def test_create_event_name_too_long(client: AsyncClient, event_data):
    response = await client.post("/api/events", json=event_data(name="x" * 101))
    assert response.status_code == 400
    assert response.json()["errors"] == ["Event name cannot exceed 100 characters"]


@pytest.mark.asyncio
async def test_create_event_free_text_time(client: AsyncClient, event_data):
    """Time is free text with no length limit."""
    when = "Doors at 6:30 PM, dinner at 7:30 PM, dancing from 9 PM until late"
    response = await client.post("/api/events", json=event_data(time=when))
    assert response.status_code == 201
    assert response.json()["data"]["time"] == when


@pytest.mark.asyncio
async def test_create_event_non_object_body(client: AsyncClient):
    response = await client.post("/api/events", content="not json at all", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_list_events_ordered_by_date(client: AsyncClient, event_data):
    later = (date.today() + timedelta(days=60)).isoformat()
    sooner = (date.today() + timedelta(days=5)).isoformat()
    await client.post("/api/events", json=event_data(name="Later", date=later))
    await client.post("/api/events", json=event_data(name="Sooner", date=sooner))

    response = await client.get("/api/events")
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [e["name"] for e in body["data"]] == ["Sooner", "Later"]


@pytest.mark.asyncio
async def test_list_events_status_filter(client: AsyncClient, test_event, past_event):
    response = await client.get("/api/events?status=completed")
    assert response.status_code == 200
    data = response.json()["data"]
    assert [e["id"] for e in data] == [past_event.id]


@pytest.mark.asyncio
async def test_list_events_upcoming(client: AsyncClient, test_event, past_event):
    response = await client.get("/api/events?upcoming=true")
    assert response.status_code == 200
    data = response.json()["data"]
    assert [e["id"] for e in data] == [test_event.id]
    assert data[0]["isUpcoming"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["?status=&upcoming=", "?upcoming=false", "?upcoming=1", "?upcoming=TRUE"])
async def test_list_events_only_literal_true_filters(client: AsyncClient, test_event, past_event, query):
    """Blank parameters, as sent by an unfilled form, list everything."""
    expected = [past_event.id, test_event.id]
    response = await client.get(f"/api/events{query}")
    assert response.status_code == 200
    assert [e["id"] for e in response.json()["data"]] == expected


@pytest.mark.asyncio
async def test_event_dated_today_is_upcoming(client: AsyncClient, db_session):
    today = datetime.now(timezone.utc).date()
    yesterday = Event(name="Yesterday", date=today - timedelta(days=1), time="Noon", location="Here")
    tonight = Event(name="Tonight", date=today, time="11:30 PM", location="Here")
    db_session.add_all([yesterday, tonight])
    await db_session.commit()
    tonight_id = tonight.id

    response = await client.get("/api/events?upcoming=true")
    assert [e["id"] for e in response.json()["data"]] == [tonight_id]
    assert response.json()["data"][0]["isUpcoming"] is True

    response = await client.get("/api/events")
    assert [e["isUpcoming"] for e in response.json()["data"]] == [False, True]


@pytest.mark.asyncio
async def test_list_events_empty(client: AsyncClient):
    response = await client.get("/api/events")
    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 0, "data": []}


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, test_event):
    response = await client.get(f"/api/events/{test_event.id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == test_event.id
    assert data["name"] == "Summer Gala"


@pytest.mark.asyncio
async def test_get_event_not_found(client: AsyncClient):
    response = await client.get("/api/events/99999")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Event not found"}


@pytest.mark.asyncio
async def test_get_event_malformed_id(client: AsyncClient):
    response = await client.get("/api/events/not-an-id")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"


@pytest.mark.asyncio
async def test_update_event(client: AsyncClient, test_event):
    """PUT merges into the stored event; untouched fields keep their values."""
    response = await client.put(f"/api/events/{test_event.id}", json={"location": "Rooftop", "budget": 9000})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["location"] == "Rooftop"
    assert data["budget"] == 9000
    assert data["name"] == "Summer Gala"
    assert response.json()["message"] == "Event updated successfully"


@pytest.mark.asyncio
async def test_update_event_cannot_write_counters(client: AsyncClient, test_guest, test_event):
    response = await client.put(f"/api/events/{test_event.id}", json={"guestCount": 99})
    assert response.status_code == 200
    assert response.json()["data"]["guestCount"] == 1


@pytest.mark.asyncio
async def test_update_event_invalid(client: AsyncClient, test_event):
    response = await client.put(f"/api/events/{test_event.id}", json={"budget": -10, "name": ""})
    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"Budget cannot be negative", "Event name is required"}


@pytest.mark.asyncio
async def test_update_event_not_found(client: AsyncClient):
    response = await client.put("/api/events/99999", json={"name": "Ghost"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_event_status(client: AsyncClient, test_event):
    response = await client.patch(f"/api/events/{test_event.id}/status", json={"status": "confirmed"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "confirmed"


@pytest.mark.asyncio
async def test_update_event_status_missing(client: AsyncClient, test_event):
    response = await client.patch(f"/api/events/{test_event.id}/status", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Status is required"


@pytest.mark.asyncio
async def test_update_event_status_invalid(client: AsyncClient, test_event):
    response = await client.patch(f"/api/events/{test_event.id}/status", json={"status": "postponed"})
    assert response.status_code == 400
    assert "planning" in response.json()["message"]


@pytest.mark.asyncio
async def test_update_event_status_not_found(client: AsyncClient):
    response = await client.patch("/api/events/99999/status", json={"status": "confirmed"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_event_cascades(client: AsyncClient, db_session, test_event, test_guest, test_vendor):
    """Deleting an event removes its guests and vendors and nothing else."""
    event_id = test_event.id
    other = Event(name="Other", date=date.today(), time="9 AM", location="Elsewhere", guest_count=1, vendor_count=0)
    db_session.add(other)
    await db_session.flush()
    db_session.add(Guest(event_id=other.id, name="Rory"))
    await db_session.commit()

    response = await client.delete(f"/api/events/{event_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Event and all related data deleted successfully"
    assert body["data"] == {"deletedEvent": "Summer Gala", "guestsDeleted": 1, "vendorsDeleted": 1}

    remaining_guests = await db_session.execute(select(func.count()).select_from(Guest))
    remaining_vendors = await db_session.execute(select(func.count()).select_from(Vendor))
    assert remaining_guests.scalar_one() == 1
    assert remaining_vendors.scalar_one() == 0

    response = await client.get(f"/api/events/{event_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_event_not_found_deletes_nothing(client: AsyncClient, db_session, test_guest):
    response = await client.delete("/api/events/99999")
    assert response.status_code == 404
    count = await db_session.execute(select(func.count()).select_from(Guest))
    assert count.scalar_one() == 1


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient):
    response = await client.get("/api/nothing-here")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Route not found"
    assert body["path"] == "/api/nothing-here"
