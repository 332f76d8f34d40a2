"""
Event endpoints with Redis caching on list operations.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventplanner.db.session import get_db
from eventplanner.schemas.common import envelope, serialize, serialize_many
from eventplanner.schemas.event import EventDetailsResponse, EventResponse, EventStatsResponse
from eventplanner.services import event_service
from eventplanner.services.cache_service import get_cached_events, set_cached_events, invalidate_event_cache
from eventplanner.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.get("")
async def list_events_endpoint(
    status_filter: Optional[str] = Query(None, alias="status"),
    upcoming: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """
    List events ordered by date.
    Only `upcoming=true` filters by date; any other value, empty included,
    lists everything. Unfiltered-by-date results are cached in Redis for
    5 minutes and invalidated whenever an event or its counters change.
    """
    upcoming_only = upcoming == "true"
    if not upcoming_only:
        cached = await get_cached_events(status_filter)
        if cached is not None:
            logger.info("events_list_cache_hit", status=status_filter)
            return envelope(data=cached, count=len(cached))

    events = await event_service.list_events(db, status=status_filter, upcoming_only=upcoming_only)
    data = serialize_many(EventResponse, events)

    if not upcoming_only:
        await set_cached_events(status_filter, data)

    return envelope(data=data, count=len(data))


@router.get("/{event_id}")
async def get_event_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    event = await event_service.get_event(db, event_id)
    return envelope(data=serialize(EventResponse, event))


@router.get("/{event_id}/details")
async def get_event_details_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    """Event with its guests, vendors and summary statistics."""
    details = await event_service.get_event_with_details(db, event_id)
    return envelope(data=serialize(EventDetailsResponse, details))


@router.get("/{event_id}/stats")
async def get_event_stats_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    stats = await event_service.get_event_stats(db, event_id)
    return envelope(data=serialize(EventStatsResponse, stats))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(payload: dict = Body(...), db: AsyncSession = Depends(get_db)):
    event = await event_service.create_event(db, payload)
    await db.commit()
    await invalidate_event_cache()
    return envelope(data=serialize(EventResponse, event), message="Event created successfully")


@router.put("/{event_id}")
async def update_event_endpoint(
    event_id: int,
    payload: dict = Body(...),
    db: AsyncSession = Depends(get_db),
):
    event = await event_service.update_event(db, event_id, payload)
    await db.commit()
    await invalidate_event_cache()
    return envelope(data=serialize(EventResponse, event), message="Event updated successfully")


@router.patch("/{event_id}/status")
async def update_event_status_endpoint(
    event_id: int,
    payload: Optional[dict] = Body(None),
    db: AsyncSession = Depends(get_db),
):
    event = await event_service.set_event_status(db, event_id, (payload or {}).get("status"))
    await db.commit()
    await invalidate_event_cache()
    return envelope(data=serialize(EventResponse, event), message="Event status updated successfully")


@router.delete("/{event_id}")
async def delete_event_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an event together with all of its guests and vendors."""
    result = await event_service.delete_event(db, event_id)
    await db.commit()
    await invalidate_event_cache()
    return envelope(
        message="Event and all related data deleted successfully",
        data={
            "deletedEvent": result["deleted_event"],
            "guestsDeleted": result["guests_deleted"],
            "vendorsDeleted": result["vendors_deleted"],
        },
    )
