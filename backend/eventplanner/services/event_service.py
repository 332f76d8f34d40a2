"""
Event service: CRUD, on-demand statistics and the cascading delete.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from eventplanner.core.exceptions import BadRequestError, NotFoundError
from eventplanner.core.logging import get_logger
from eventplanner.core.metrics import record_mutation, record_cascade_delete, record_stats
from eventplanner.models.event import Event, EVENT_STATUSES, today
from eventplanner.models.guest import Guest
from eventplanner.models.vendor import Vendor
from eventplanner.schemas.base import validate_payload
from eventplanner.schemas.common import serialize
from eventplanner.schemas.event import EventCreate, EventResponse
from eventplanner.services.stats import summarize_guests, summarize_vendors

logger = get_logger(__name__)


async def list_events(
    db: AsyncSession,
    status: Optional[str] = None,
    upcoming_only: bool = False,
) -> list[Event]:
    """
    List events ordered by date ascending.
    `upcoming_only` keeps events dated today or later, evaluated per call.
    Uses the ix_events_date / ix_events_status indexes.
    """
    query = select(Event)

    if status:
        query = query.where(Event.status == status)

    if upcoming_only:
        query = query.where(Event.date >= today())

    result = await db.execute(query.order_by(Event.date.asc(), Event.id.asc()))
    return list(result.scalars().all())


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """Get a single event by ID."""
    event = await db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event")
    return event


async def _dependents(db: AsyncSession, event_id: int) -> tuple[list[Guest], list[Vendor]]:
    guests = await db.execute(
        select(Guest).where(Guest.event_id == event_id).order_by(Guest.name.asc(), Guest.id.asc())
    )
    vendors = await db.execute(
        select(Vendor)
        .where(Vendor.event_id == event_id)
        .order_by(Vendor.category.asc(), Vendor.name.asc(), Vendor.id.asc())
    )
    return list(guests.scalars().all()), list(vendors.scalars().all())


async def get_event_with_details(db: AsyncSession, event_id: int) -> dict:
    """Event plus its guests (by name), vendors (by category, name) and summary stats."""
    event = await get_event(db, event_id)
    guests, vendors = await _dependents(db, event_id)

    guest_summary = summarize_guests(guests)
    vendor_summary = summarize_vendors(vendors)
    record_stats("event_details")

    return {
        "event": event,
        "guests": guests,
        "guest_stats": guest_summary.rsvp_breakdown(),
        "vendors": vendors,
        "vendor_stats": vendor_summary.pricing_summary(),
    }


async def get_event_stats(db: AsyncSession, event_id: int, now: Optional[datetime] = None) -> dict:
    """Headline numbers for an event, including days until it starts (negative once past)."""
    event = await get_event(db, event_id)
    guests, vendors = await _dependents(db, event_id)
    record_stats("event_stats")

    return {
        "event": {
            "name": event.name,
            "date": event.date,
            "location": event.location,
            "status": event.status,
            "budget": event.budget,
            "days_until": event.days_until(now or datetime.now(timezone.utc)),
        },
        "guests": summarize_guests(guests).headline(),
        "vendors": summarize_vendors(vendors).headline(),
    }


async def create_event(db: AsyncSession, payload: dict) -> Event:
    """Create a new event. Counters always start at zero."""
    data = validate_payload(EventCreate, payload)

    event = Event(**data.model_dump(), guest_count=0, vendor_count=0)
    db.add(event)
    await db.flush()
    await db.refresh(event)

    record_mutation("event", "create")
    logger.info("event_created", event_id=event.id, name=event.name, date=str(event.date))
    return event


async def update_event(db: AsyncSession, event_id: int, payload: dict) -> Event:
    """
    Full-document update: the stored event merged with the payload is
    validated as a whole. Counters are not client-writable.
    """
    event = await get_event(db, event_id)
    merged = {**serialize(EventResponse, event), **payload}
    data = validate_payload(EventCreate, merged)

    for field, value in data.model_dump().items():
        setattr(event, field, value)
    await db.flush()

    record_mutation("event", "update")
    logger.info("event_updated", event_id=event.id)
    return event


async def set_event_status(db: AsyncSession, event_id: int, status: Optional[str]) -> Event:
    if not status:
        raise BadRequestError("Status is required")
    if status not in EVENT_STATUSES:
        raise BadRequestError(f"Invalid status '{status}'. Must be one of: {', '.join(EVENT_STATUSES)}")

    event = await get_event(db, event_id)
    event.status = status
    await db.flush()

    record_mutation("event", "patch")
    logger.info("event_status_updated", event_id=event.id, status=status)
    return event


async def delete_event(db: AsyncSession, event_id: int) -> dict:
    """
    Delete an event, then every guest and vendor that references it.

    The existence check happens before anything is deleted. All three
    deletes run in the request's transaction, so either the whole cascade
    commits or none of it does.
    """
    event = await get_event(db, event_id)
    name = event.name

    await db.delete(event)
    await db.flush()

    guests = await db.execute(delete(Guest).where(Guest.event_id == event_id))
    vendors = await db.execute(delete(Vendor).where(Vendor.event_id == event_id))

    record_mutation("event", "delete")
    record_cascade_delete("guest", guests.rowcount)
    record_cascade_delete("vendor", vendors.rowcount)
    logger.info(
        "event_cascade_deleted",
        event_id=event_id,
        guests_deleted=guests.rowcount,
        vendors_deleted=vendors.rowcount,
    )
    return {
        "deleted_event": name,
        "guests_deleted": guests.rowcount,
        "vendors_deleted": vendors.rowcount,
    }
