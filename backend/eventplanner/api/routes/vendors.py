"""
Vendor endpoints. Adds and deletes rewrite the owning event's vendorCount,
so they also drop the cached event listings.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventplanner.db.session import get_db
from eventplanner.schemas.common import envelope, serialize, serialize_many
from eventplanner.schemas.vendor import VendorResponse, VendorStatsResponse
from eventplanner.services import vendor_service
from eventplanner.services.cache_service import invalidate_event_cache

router = APIRouter(prefix="/vendors", tags=["Vendors"])


@router.get("/event/{event_id}")
async def list_vendors_endpoint(
    event_id: int,
    category: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    vendors = await vendor_service.list_vendors(db, event_id, category=category, status=status_filter)
    return envelope(data=serialize_many(VendorResponse, vendors), count=len(vendors))


@router.get("/event/{event_id}/category/{category}")
async def vendors_by_category_endpoint(event_id: int, category: str, db: AsyncSession = Depends(get_db)):
    vendors = await vendor_service.get_vendors_by_category(db, event_id, category)
    return envelope(data=serialize_many(VendorResponse, vendors), count=len(vendors), category=category)


@router.get("/event/{event_id}/stats")
async def vendor_stats_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    stats = await vendor_service.get_vendor_stats(db, event_id)
    return envelope(data=serialize(VendorStatsResponse, stats))


@router.get("/{vendor_id}")
async def get_vendor_endpoint(vendor_id: int, db: AsyncSession = Depends(get_db)):
    vendor = await vendor_service.get_vendor(db, vendor_id)
    return envelope(data=serialize(VendorResponse, vendor))


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_vendor_endpoint(payload: dict = Body(...), db: AsyncSession = Depends(get_db)):
    vendor = await vendor_service.add_vendor(db, payload)
    await db.commit()
    await invalidate_event_cache()
    return envelope(data=serialize(VendorResponse, vendor), message="Vendor added successfully")


@router.post("/bulk", status_code=status.HTTP_201_CREATED)
async def add_vendors_bulk_endpoint(payload: dict = Body(...), db: AsyncSession = Depends(get_db)):
    """Body: {"eventId": ..., "vendors": [...]}. All-or-nothing."""
    vendors = await vendor_service.add_vendors_bulk(db, payload)
    await db.commit()
    await invalidate_event_cache()
    return envelope(
        data=serialize_many(VendorResponse, vendors),
        count=len(vendors),
        message=f"{len(vendors)} vendors added successfully",
    )


@router.put("/{vendor_id}")
async def update_vendor_endpoint(
    vendor_id: int,
    payload: dict = Body(...),
    db: AsyncSession = Depends(get_db),
):
    vendor = await vendor_service.update_vendor(db, vendor_id, payload)
    return envelope(data=serialize(VendorResponse, vendor), message="Vendor updated successfully")


@router.patch("/{vendor_id}/status")
async def update_vendor_status_endpoint(
    vendor_id: int,
    payload: Optional[dict] = Body(None),
    db: AsyncSession = Depends(get_db),
):
    vendor = await vendor_service.set_vendor_status(db, vendor_id, (payload or {}).get("status"))
    return envelope(data=serialize(VendorResponse, vendor), message="Vendor status updated successfully")


@router.patch("/{vendor_id}/contract")
async def update_vendor_contract_endpoint(
    vendor_id: int,
    payload: Optional[dict] = Body(None),
    db: AsyncSession = Depends(get_db),
):
    """Body: any of {contractSigned, depositPaid, depositAmount}. Omitted keys keep their values."""
    vendor = await vendor_service.set_vendor_contract(db, vendor_id, payload or {})
    return envelope(
        data=serialize(VendorResponse, vendor),
        message="Contract/deposit status updated successfully",
    )


@router.delete("/event/{event_id}/all")
async def delete_all_vendors_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await vendor_service.delete_all_vendors(db, event_id)
    await db.commit()
    await invalidate_event_cache()
    return envelope(
        message=f"{deleted} vendors deleted successfully",
        count=deleted,
        data={"deletedCount": deleted},
    )


@router.delete("/{vendor_id}")
async def delete_vendor_endpoint(vendor_id: int, db: AsyncSession = Depends(get_db)):
    vendor = await vendor_service.delete_vendor(db, vendor_id)
    await db.commit()
    await invalidate_event_cache()
    return envelope(message="Vendor deleted successfully", data={"deletedVendor": vendor.name})
