"""
Tests for the statistics endpoints and the aggregation they share.
"""

import pytest
import pytest_asyncio
from datetime import date, datetime, timezone
from httpx import AsyncClient

from eventplanner.models import Event, Guest, Vendor
from eventplanner.services import event_service
from eventplanner.services.stats import summarize_guests, summarize_vendors


@pytest_asyncio.fixture
async def gala_guests(db_session, test_event) -> list[Guest]:
    """Three confirmed (two bringing a plus-one), one pending, one declined with a plus-one."""
    guests = [
        Guest(event_id=test_event.id, name="Ada", rsvp_status="confirmed", plus_one=True),
        Guest(event_id=test_event.id, name="Ben", rsvp_status="confirmed", plus_one=True),
        Guest(event_id=test_event.id, name="Cal", rsvp_status="confirmed"),
        Guest(event_id=test_event.id, name="Dee", rsvp_status="pending"),
        Guest(event_id=test_event.id, name="Eve", rsvp_status="declined", plus_one=True),
    ]
    db_session.add_all(guests)
    test_event.guest_count = len(guests)
    await db_session.commit()
    return guests


@pytest_asyncio.fixture
async def gala_vendors(db_session, test_event) -> list[Vendor]:
    vendors = [
        Vendor(event_id=test_event.id, name="Hall", category="venue", phone="1", status="booked",
               quoted_price=5000, final_price=4800, contract_signed=True, deposit_paid=True, deposit_amount=1000),
        Vendor(event_id=test_event.id, name="Feast", category="catering", phone="2", status="confirmed",
               quoted_price=3000),
        Vendor(event_id=test_event.id, name="Bites", category="catering", phone="3", quoted_price=2500),
        Vendor(event_id=test_event.id, name="Petals", category="florist", phone="4", quoted_price=800),
    ]
    db_session.add_all(vendors)
    test_event.vendor_count = len(vendors)
    await db_session.commit()
    return vendors


@pytest.mark.asyncio
async def test_guest_stats(client: AsyncClient, test_event, gala_guests):
    response = await client.get(f"/api/guests/event/{test_event.id}/stats")
    assert response.status_code == 200
    assert response.json()["data"] == {
        "total": 5,
        "confirmed": 3,
        "pending": 1,
        "declined": 1,
        "withPlusOne": 2,
        "estimatedAttendees": 5,
    }


@pytest.mark.asyncio
async def test_guest_stats_unknown_event_is_zero(client: AsyncClient):
    response = await client.get("/api/guests/event/99999/stats")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 0
    assert data["estimatedAttendees"] == 0


@pytest.mark.asyncio
async def test_vendor_stats(client: AsyncClient, test_event, gala_vendors):
    response = await client.get(f"/api/vendors/event/{test_event.id}/stats")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 4
    assert data["booked"] == 2
    assert data["contractsSigned"] == 1
    assert data["depositsPaid"] == 1
    assert data["pricing"] == {"totalQuoted": 11300, "totalFinal": 4800, "totalDeposits": 1000}
    assert data["categoryBreakdown"] == [
        {"category": "catering", "count": 2, "booked": 1},
        {"category": "venue", "count": 1, "booked": 1},
        {"category": "florist", "count": 1, "booked": 0},
    ]


@pytest.mark.asyncio
async def test_event_details(client: AsyncClient, test_event, gala_guests, gala_vendors):
    response = await client.get(f"/api/events/{test_event.id}/details")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["event"]["id"] == test_event.id
    assert [g["name"] for g in data["guests"]] == ["Ada", "Ben", "Cal", "Dee", "Eve"]
    assert [v["name"] for v in data["vendors"]] == ["Bites", "Feast", "Petals", "Hall"]
    assert data["guestStats"] == {"total": 5, "confirmed": 3, "pending": 1, "declined": 1}
    assert data["vendorStats"] == {"total": 4, "booked": 2, "totalQuoted": 11300, "totalFinal": 4800}


@pytest.mark.asyncio
async def test_event_details_not_found(client: AsyncClient):
    response = await client.get("/api/events/99999/details")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_event_stats(client: AsyncClient, test_event, gala_guests, gala_vendors):
    response = await client.get(f"/api/events/{test_event.id}/stats")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["event"]["name"] == "Summer Gala"
    assert data["event"]["budget"] == 15000
    assert "daysUntil" in data["event"]
    # pending here is everyone who has not confirmed, declined included
    assert data["guests"] == {"total": 5, "confirmed": 3, "pending": 2}
    assert data["vendors"] == {"total": 4, "booked": 2, "researching": 2}


@pytest.mark.asyncio
async def test_event_stats_days_until(db_session):
    event = Event(name="Fixed", date=date(2026, 3, 10), time="Noon", location="Here")
    db_session.add(event)
    await db_session.commit()

    stats = await event_service.get_event_stats(db_session, event.id, now=datetime(2026, 3, 1, 12, tzinfo=timezone.utc))
    assert stats["event"]["days_until"] == 9


def test_days_until_rounds_up_and_goes_negative():
    event = Event(date=date(2026, 3, 10))
    assert event.days_until(datetime(2026, 3, 9, 23, 0, tzinfo=timezone.utc)) == 1
    assert event.days_until(datetime(2026, 3, 10, 0, 0, tzinfo=timezone.utc)) == 0
    assert event.days_until(datetime(2026, 3, 12, 0, 0, tzinfo=timezone.utc)) == -2


def test_summaries_of_nothing():
    assert summarize_guests([]).full() == {
        "total": 0,
        "confirmed": 0,
        "pending": 0,
        "declined": 0,
        "with_plus_one": 0,
        "estimated_attendees": 0,
    }
    vendors = summarize_vendors([]).full()
    assert vendors["category_breakdown"] == []
    assert vendors["pricing"]["total_quoted"] == 0


def test_pending_plus_one_not_counted():
    guests = [Guest(name="A", rsvp_status="pending", plus_one=True)]
    assert summarize_guests(guests).estimated_attendees == 0


@pytest.mark.asyncio
async def test_gala_walkthrough(client: AsyncClient):
    response = await client.post(
        "/api/events",
        json={"name": "Gala", "date": "2025-06-01", "time": "19:00", "location": "Hall"},
    )
    assert response.status_code == 201
    event = response.json()["data"]
    assert (event["guestCount"], event["vendorCount"]) == (0, 0)

    amy = (await client.post("/api/guests", json={"name": "Amy", "eventId": event["id"]})).json()["data"]
    assert (await client.get(f"/api/events/{event['id']}")).json()["data"]["guestCount"] == 1

    bo = (
        await client.post(
            "/api/guests",
            json={"name": "Bo", "eventId": event["id"], "rsvpStatus": "confirmed", "plusOne": True},
        )
    ).json()["data"]

    details = (await client.get(f"/api/events/{event['id']}/details")).json()["data"]
    assert details["guestStats"] == {"total": 2, "confirmed": 1, "pending": 1, "declined": 0}
    stats = (await client.get(f"/api/guests/event/{event['id']}/stats")).json()["data"]
    assert stats["estimatedAttendees"] == 2

    assert (await client.delete(f"/api/events/{event['id']}")).status_code == 200
    assert (await client.get(f"/api/guests/{amy['id']}")).status_code == 404
    assert (await client.get(f"/api/guests/{bo['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_booked_vendor_pricing(client: AsyncClient, test_event):
    await client.post(
        "/api/vendors",
        json={
            "eventId": test_event.id,
            "name": "Hall",
            "category": "venue",
            "phone": "1",
            "quotedPrice": 500,
            "finalPrice": 0,
            "status": "booked",
        },
    )
    stats = (await client.get(f"/api/vendors/event/{test_event.id}/stats")).json()["data"]
    assert stats["pricing"]["totalQuoted"] == 500
    assert stats["pricing"]["totalFinal"] == 0
    assert stats["booked"] == 1
