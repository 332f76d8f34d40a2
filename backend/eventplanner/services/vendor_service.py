"""
Vendor service. Mirrors the guest service with `vendor_count` as the
maintained counter, plus category lookups, contract/deposit patches and the
pricing/category statistics.
"""

from typing import Any, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from eventplanner.core.exceptions import BadRequestError, NotFoundError, ValidationError
from eventplanner.core.logging import get_logger
from eventplanner.core.metrics import record_mutation, record_stats
from eventplanner.models.vendor import Vendor, VENDOR_STATUSES
from eventplanner.schemas.base import collect_errors, validate_payload
from eventplanner.schemas.common import serialize
from eventplanner.schemas.vendor import VendorContractUpdate, VendorCreate, VendorResponse
from eventplanner.services.counters import (
    parse_event_id,
    refresh_vendor_count,
    require_event,
    reset_counter,
)
from eventplanner.services.stats import summarize_vendors

logger = get_logger(__name__)


async def list_vendors(
    db: AsyncSession,
    event_id: int,
    category: Optional[str] = None,
    status: Optional[str] = None,
) -> list[Vendor]:
    """Vendors of an event ordered by category, then name."""
    query = select(Vendor).where(Vendor.event_id == event_id)
    if category:
        query = query.where(Vendor.category == category)
    if status:
        query = query.where(Vendor.status == status)
    result = await db.execute(
        query.order_by(Vendor.category.asc(), Vendor.name.asc(), Vendor.id.asc())
    )
    return list(result.scalars().all())


async def get_vendors_by_category(db: AsyncSession, event_id: int, category: str) -> list[Vendor]:
    result = await db.execute(
        select(Vendor)
        .where(Vendor.event_id == event_id, Vendor.category == category)
        .order_by(Vendor.name.asc(), Vendor.id.asc())
    )
    return list(result.scalars().all())


async def get_vendor(db: AsyncSession, vendor_id: int) -> Vendor:
    vendor = await db.get(Vendor, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor")
    return vendor


async def get_vendor_stats(db: AsyncSession, event_id: int) -> dict:
    """
    Booking, contract and deposit counts, pricing totals and the category
    breakdown. Pricing and categories need every row, so this scans the
    event's vendors in insertion order.
    """
    result = await db.execute(
        select(Vendor).where(Vendor.event_id == event_id).order_by(Vendor.id.asc())
    )
    record_stats("vendor_stats")
    return summarize_vendors(result.scalars().all()).full()


async def add_vendor(db: AsyncSession, payload: dict) -> Vendor:
    event = await require_event(db, payload.get("eventId"))
    data = validate_payload(VendorCreate, {**payload, "eventId": event.id})

    vendor = Vendor(**data.model_dump())
    db.add(vendor)
    await db.flush()
    await db.refresh(vendor)
    await refresh_vendor_count(db, event.id)

    record_mutation("vendor", "create")
    logger.info("vendor_created", vendor_id=vendor.id, event_id=event.id, category=vendor.category)
    return vendor


async def add_vendors_bulk(db: AsyncSession, payload: dict) -> list[Vendor]:
    items: Any = payload.get("vendors")
    if parse_event_id(payload.get("eventId")) is None or not isinstance(items, list) or not items:
        raise BadRequestError("Invalid request. Provide eventId and a non-empty vendors array")

    event = await require_event(db, payload["eventId"])

    errors: list[str] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            errors.append(f"vendors[{index}]: Vendor must be an object")
            continue
        errors.extend(f"vendors[{index}]: {e}" for e in collect_errors(VendorCreate, {**item, "eventId": event.id}))
    if errors:
        raise ValidationError(errors)

    vendors = [
        Vendor(**VendorCreate.model_validate({**item, "eventId": event.id}).model_dump())
        for item in items
    ]
    db.add_all(vendors)
    await db.flush()
    for vendor in vendors:
        await db.refresh(vendor)
    await refresh_vendor_count(db, event.id)

    record_mutation("vendor", "create", len(vendors))
    logger.info("vendors_bulk_created", event_id=event.id, created=len(vendors))
    return vendors


async def update_vendor(db: AsyncSession, vendor_id: int, payload: dict) -> Vendor:
    """Full-document update. A vendor stays attached to the event it was created for."""
    vendor = await get_vendor(db, vendor_id)
    merged = {**serialize(VendorResponse, vendor), **payload, "eventId": vendor.event_id}
    data = validate_payload(VendorCreate, merged)

    for field, value in data.model_dump(exclude={"event_id"}).items():
        setattr(vendor, field, value)
    await db.flush()

    record_mutation("vendor", "update")
    logger.info("vendor_updated", vendor_id=vendor.id)
    return vendor


async def set_vendor_status(db: AsyncSession, vendor_id: int, status: Optional[str]) -> Vendor:
    if not status:
        raise BadRequestError("Status is required")
    if status not in VENDOR_STATUSES:
        raise BadRequestError(f"Invalid status '{status}'. Must be one of: {', '.join(VENDOR_STATUSES)}")

    vendor = await get_vendor(db, vendor_id)
    vendor.status = status
    await db.flush()

    record_mutation("vendor", "patch")
    logger.info("vendor_status_updated", vendor_id=vendor.id, status=status)
    return vendor


async def set_vendor_contract(db: AsyncSession, vendor_id: int, payload: dict) -> Vendor:
    """Patch contractSigned / depositPaid / depositAmount; absent or null keys are left as they are."""
    vendor = await get_vendor(db, vendor_id)
    changes = validate_payload(VendorContractUpdate, payload).model_dump(exclude_none=True)

    for field, value in changes.items():
        setattr(vendor, field, value)
    await db.flush()

    record_mutation("vendor", "patch")
    logger.info("vendor_contract_updated", vendor_id=vendor.id, changed=sorted(changes))
    return vendor


async def delete_vendor(db: AsyncSession, vendor_id: int) -> Vendor:
    vendor = await get_vendor(db, vendor_id)
    await db.delete(vendor)
    await db.flush()
    await refresh_vendor_count(db, vendor.event_id)

    record_mutation("vendor", "delete")
    logger.info("vendor_deleted", vendor_id=vendor_id, event_id=vendor.event_id)
    return vendor


async def delete_all_vendors(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(delete(Vendor).where(Vendor.event_id == event_id))
    await reset_counter(db, event_id, "vendor_count")

    record_mutation("vendor", "delete", result.rowcount)
    logger.info("vendors_deleted_for_event", event_id=event_id, deleted=result.rowcount)
    return result.rowcount
