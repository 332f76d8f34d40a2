"""
Maintenance of the denormalized `guest_count` / `vendor_count` on events.

After any insert or delete of guests/vendors the owning event's counter is
rewritten from a live COUNT inside the same request transaction, so the
counter and the rows it describes commit together.

Known race: two requests adding to the same event at the same time can both
count before either commits and write the same stale value. The counter is a
best-effort cache; the next mutation on that event recounts and repairs it.
"""

from typing import Any, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from eventplanner.core.exceptions import NotFoundError
from eventplanner.core.logging import get_logger
from eventplanner.core.metrics import record_counter_recompute
from eventplanner.models.event import Event
from eventplanner.models.guest import Guest
from eventplanner.models.vendor import Vendor

logger = get_logger(__name__)


def parse_event_id(raw: Any) -> Optional[int]:
    """Coerce an eventId from a JSON body; None if absent or not an integer id."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


async def require_event(db: AsyncSession, raw_event_id: Any) -> Event:
    """Load the owning event or raise NotFoundError."""
    event_id = parse_event_id(raw_event_id)
    event = await db.get(Event, event_id) if event_id is not None else None
    if event is None:
        raise NotFoundError("Event")
    return event


async def count_guests(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(select(func.count()).select_from(Guest).where(Guest.event_id == event_id))
    return result.scalar_one()


async def count_vendors(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(select(func.count()).select_from(Vendor).where(Vendor.event_id == event_id))
    return result.scalar_one()


async def refresh_guest_count(db: AsyncSession, event_id: int) -> Optional[int]:
    """Recount guests for `event_id` and store the result. None if the event is gone."""
    event = await db.get(Event, event_id)
    if event is None:
        return None
    event.guest_count = await count_guests(db, event_id)
    await db.flush()
    record_counter_recompute("guest_count")
    logger.info("guest_count_recomputed", event_id=event_id, guest_count=event.guest_count)
    return event.guest_count


async def refresh_vendor_count(db: AsyncSession, event_id: int) -> Optional[int]:
    """Recount vendors for `event_id` and store the result. None if the event is gone."""
    event = await db.get(Event, event_id)
    if event is None:
        return None
    event.vendor_count = await count_vendors(db, event_id)
    await db.flush()
    record_counter_recompute("vendor_count")
    logger.info("vendor_count_recomputed", event_id=event_id, vendor_count=event.vendor_count)
    return event.vendor_count


async def reset_counter(db: AsyncSession, event_id: int, counter: str) -> None:
    """Zero a counter directly after every dependent row was removed."""
    event = await db.get(Event, event_id)
    if event is None:
        return
    setattr(event, counter, 0)
    await db.flush()
    logger.info("counter_reset", event_id=event_id, counter=counter)
