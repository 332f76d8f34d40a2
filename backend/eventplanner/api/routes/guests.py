"""
Guest endpoints. Adds and deletes rewrite the owning event's guestCount,
so they also drop the cached event listings.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventplanner.db.session import get_db
from eventplanner.schemas.common import envelope, serialize, serialize_many
from eventplanner.schemas.guest import GuestResponse, GuestStatsResponse
from eventplanner.services import guest_service
from eventplanner.services.cache_service import invalidate_event_cache

router = APIRouter(prefix="/guests", tags=["Guests"])


@router.get("/event/{event_id}")
async def list_guests_endpoint(
    event_id: int,
    rsvp_status: Optional[str] = Query(None, alias="rsvpStatus"),
    db: AsyncSession = Depends(get_db),
):
    guests = await guest_service.list_guests(db, event_id, rsvp_status)
    return envelope(data=serialize_many(GuestResponse, guests), count=len(guests))


@router.get("/event/{event_id}/stats")
async def guest_stats_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    stats = await guest_service.get_guest_stats(db, event_id)
    return envelope(data=serialize(GuestStatsResponse, stats))


@router.get("/{guest_id}")
async def get_guest_endpoint(guest_id: int, db: AsyncSession = Depends(get_db)):
    guest = await guest_service.get_guest(db, guest_id)
    return envelope(data=serialize(GuestResponse, guest))


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_guest_endpoint(payload: dict = Body(...), db: AsyncSession = Depends(get_db)):
    guest = await guest_service.add_guest(db, payload)
    await db.commit()
    await invalidate_event_cache()
    return envelope(data=serialize(GuestResponse, guest), message="Guest added successfully")


@router.post("/bulk", status_code=status.HTTP_201_CREATED)
async def add_guests_bulk_endpoint(payload: dict = Body(...), db: AsyncSession = Depends(get_db)):
    """Body: {"eventId": ..., "guests": [...]}. All-or-nothing."""
    guests = await guest_service.add_guests_bulk(db, payload)
    await db.commit()
    await invalidate_event_cache()
    return envelope(
        data=serialize_many(GuestResponse, guests),
        count=len(guests),
        message=f"{len(guests)} guests added successfully",
    )


@router.put("/{guest_id}")
async def update_guest_endpoint(
    guest_id: int,
    payload: dict = Body(...),
    db: AsyncSession = Depends(get_db),
):
    guest = await guest_service.update_guest(db, guest_id, payload)
    return envelope(data=serialize(GuestResponse, guest), message="Guest updated successfully")


@router.patch("/{guest_id}/rsvp")
async def update_rsvp_endpoint(
    guest_id: int,
    payload: Optional[dict] = Body(None),
    db: AsyncSession = Depends(get_db),
):
    guest = await guest_service.set_guest_rsvp(db, guest_id, (payload or {}).get("rsvpStatus"))
    return envelope(data=serialize(GuestResponse, guest), message="RSVP status updated successfully")


@router.delete("/event/{event_id}/all")
async def delete_all_guests_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await guest_service.delete_all_guests(db, event_id)
    await db.commit()
    await invalidate_event_cache()
    return envelope(
        message=f"{deleted} guests deleted successfully",
        count=deleted,
        data={"deletedCount": deleted},
    )


@router.delete("/{guest_id}")
async def delete_guest_endpoint(guest_id: int, db: AsyncSession = Depends(get_db)):
    guest = await guest_service.delete_guest(db, guest_id)
    await db.commit()
    await invalidate_event_cache()
    return envelope(message="Guest deleted successfully", data={"deletedGuest": guest.name})
