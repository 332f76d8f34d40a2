"""
Pydantic schemas for event-related request/response validation.
"""

import datetime as dt
from typing import Optional

from pydantic import Field

from eventplanner.models.event import EventStatus
from eventplanner.schemas.base import InputSchema, OutputSchema, OptionalText
from eventplanner.schemas.guest import GuestResponse
from eventplanner.schemas.vendor import VendorResponse


class EventCreate(InputSchema):
    name: str = Field(..., min_length=1, max_length=100, title="Event name")
    date: dt.date = Field(..., title="Event date")
    time: str = Field(..., min_length=1, title="Event time")
    location: str = Field(..., min_length=1, max_length=200, title="Location")
    description: OptionalText = Field(None, max_length=500, title="Description")
    status: EventStatus = Field("planning", title="Status")
    budget: float = Field(0, ge=0, title="Budget")


class EventResponse(OutputSchema):
    id: int
    name: str
    date: dt.date
    time: str
    location: str
    description: Optional[str]
    status: str
    budget: float
    guest_count: int
    vendor_count: int
    is_upcoming: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class GuestStats(OutputSchema):
    total: int
    confirmed: int
    pending: int
    declined: int


class VendorTotals(OutputSchema):
    total: int
    booked: int
    total_quoted: float
    total_final: float


class EventStatsHeader(OutputSchema):
    name: str
    date: dt.date
    location: str
    status: str
    budget: float
    days_until: int


class EventGuestCounts(OutputSchema):
    total: int
    confirmed: int
    pending: int


class EventVendorCounts(OutputSchema):
    total: int
    booked: int
    researching: int


class EventStatsResponse(OutputSchema):
    event: EventStatsHeader
    guests: EventGuestCounts
    vendors: EventVendorCounts


class EventDetailsResponse(OutputSchema):
    event: EventResponse
    guests: list[GuestResponse]
    guest_stats: GuestStats
    vendors: list[VendorResponse]
    vendor_stats: VendorTotals
