"""
Guest service. Every insert or delete rewrites the owning event's
`guest_count`; field edits and RSVP changes leave it alone.
"""

from typing import Any, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from eventplanner.core.exceptions import BadRequestError, NotFoundError, ValidationError
from eventplanner.core.logging import get_logger
from eventplanner.core.metrics import record_mutation, record_stats
from eventplanner.models.guest import Guest, RSVP_STATUSES
from eventplanner.schemas.base import collect_errors, validate_payload
from eventplanner.schemas.common import serialize
from eventplanner.schemas.guest import GuestCreate, GuestResponse
from eventplanner.services.counters import (
    parse_event_id,
    refresh_guest_count,
    require_event,
    reset_counter,
)
from eventplanner.services.stats import summarize_guests

logger = get_logger(__name__)


async def list_guests(db: AsyncSession, event_id: int, rsvp_status: Optional[str] = None) -> list[Guest]:
    query = select(Guest).where(Guest.event_id == event_id)
    if rsvp_status:
        query = query.where(Guest.rsvp_status == rsvp_status)
    result = await db.execute(query.order_by(Guest.name.asc(), Guest.id.asc()))
    return list(result.scalars().all())


async def get_guest(db: AsyncSession, guest_id: int) -> Guest:
    guest = await db.get(Guest, guest_id)
    if not guest:
        raise NotFoundError("Guest")
    return guest


async def get_guest_stats(db: AsyncSession, event_id: int) -> dict:
    """RSVP breakdown plus plus-one based attendance estimate. Zeros for an unknown event."""
    guests = await list_guests(db, event_id)
    record_stats("guest_stats")
    return summarize_guests(guests).full()


async def add_guest(db: AsyncSession, payload: dict) -> Guest:
    event = await require_event(db, payload.get("eventId"))
    data = validate_payload(GuestCreate, {**payload, "eventId": event.id})

    guest = Guest(**data.model_dump())
    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    await refresh_guest_count(db, event.id)

    record_mutation("guest", "create")
    logger.info("guest_created", guest_id=guest.id, event_id=event.id)
    return guest


async def add_guests_bulk(db: AsyncSession, payload: dict) -> list[Guest]:
    """
    Insert a batch of guests for one event. Nothing is inserted unless every
    element is valid; the counter is recomputed once for the whole batch.
    """
    items: Any = payload.get("guests")
    if parse_event_id(payload.get("eventId")) is None or not isinstance(items, list) or not items:
        raise BadRequestError("Invalid request. Provide eventId and a non-empty guests array")

    event = await require_event(db, payload["eventId"])

    errors: list[str] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            errors.append(f"guests[{index}]: Guest must be an object")
            continue
        errors.extend(f"guests[{index}]: {e}" for e in collect_errors(GuestCreate, {**item, "eventId": event.id}))
    if errors:
        raise ValidationError(errors)

    guests = [
        Guest(**GuestCreate.model_validate({**item, "eventId": event.id}).model_dump())
        for item in items
    ]
    db.add_all(guests)
    await db.flush()
    for guest in guests:
        await db.refresh(guest)
    await refresh_guest_count(db, event.id)

    record_mutation("guest", "create", len(guests))
    logger.info("guests_bulk_created", event_id=event.id, created=len(guests))
    return guests


async def update_guest(db: AsyncSession, guest_id: int, payload: dict) -> Guest:
    """Full-document update. A guest stays attached to the event it was created for."""
    guest = await get_guest(db, guest_id)
    merged = {**serialize(GuestResponse, guest), **payload, "eventId": guest.event_id}
    data = validate_payload(GuestCreate, merged)

    for field, value in data.model_dump(exclude={"event_id"}).items():
        setattr(guest, field, value)
    await db.flush()

    record_mutation("guest", "update")
    logger.info("guest_updated", guest_id=guest.id)
    return guest


async def set_guest_rsvp(db: AsyncSession, guest_id: int, rsvp_status: Optional[str]) -> Guest:
    if not rsvp_status:
        raise BadRequestError("RSVP status is required")
    if rsvp_status not in RSVP_STATUSES:
        raise BadRequestError(
            f"Invalid RSVP status '{rsvp_status}'. Must be one of: {', '.join(RSVP_STATUSES)}"
        )

    guest = await get_guest(db, guest_id)
    guest.rsvp_status = rsvp_status
    await db.flush()

    record_mutation("guest", "patch")
    logger.info("guest_rsvp_updated", guest_id=guest.id, rsvp_status=rsvp_status)
    return guest


async def delete_guest(db: AsyncSession, guest_id: int) -> Guest:
    guest = await get_guest(db, guest_id)
    await db.delete(guest)
    await db.flush()
    await refresh_guest_count(db, guest.event_id)

    record_mutation("guest", "delete")
    logger.info("guest_deleted", guest_id=guest_id, event_id=guest.event_id)
    return guest


async def delete_all_guests(db: AsyncSession, event_id: int) -> int:
    """Remove every guest of an event; the counter is zeroed without a recount."""
    result = await db.execute(delete(Guest).where(Guest.event_id == event_id))
    await reset_counter(db, event_id, "guest_count")

    record_mutation("guest", "delete", result.rowcount)
    logger.info("guests_deleted_for_event", event_id=event_id, deleted=result.rowcount)
    return result.rowcount
