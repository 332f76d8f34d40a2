"""
Pydantic schemas for guest-related request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from eventplanner.models.guest import RSVPStatus
from eventplanner.schemas.base import InputSchema, OutputSchema, OptionalText, EmailText


class GuestCreate(InputSchema):
    event_id: int = Field(..., title="Event ID")
    name: str = Field(..., min_length=1, max_length=100, title="Guest name")
    email: EmailText = Field(None, title="Email address")
    phone: OptionalText = Field(None, title="Phone number")
    rsvp_status: RSVPStatus = Field("pending", title="RSVP status")
    plus_one: bool = Field(False, title="Plus one")
    dietary_restrictions: OptionalText = Field(None, max_length=200, title="Dietary restrictions")
    notes: OptionalText = Field(None, max_length=300, title="Notes")


class GuestResponse(OutputSchema):
    id: int
    event_id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    rsvp_status: str
    plus_one: bool
    dietary_restrictions: Optional[str]
    notes: Optional[str]
    total_attendees: int
    created_at: datetime
    updated_at: datetime


class GuestStatsResponse(OutputSchema):
    total: int
    confirmed: int
    pending: int
    declined: int
    with_plus_one: int
    estimated_attendees: int
