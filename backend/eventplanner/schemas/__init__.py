from eventplanner.schemas.base import collect_errors, validate_payload
from eventplanner.schemas.common import envelope, serialize, serialize_many
from eventplanner.schemas.event import (
    EventCreate, EventResponse, EventDetailsResponse, EventStatsResponse,
)
from eventplanner.schemas.guest import GuestCreate, GuestResponse, GuestStatsResponse
from eventplanner.schemas.vendor import (
    VendorCreate, VendorContractUpdate, VendorResponse, VendorStatsResponse,
)

__all__ = [
    "collect_errors", "validate_payload",
    "envelope", "serialize", "serialize_many",
    "EventCreate", "EventResponse", "EventDetailsResponse", "EventStatsResponse",
    "GuestCreate", "GuestResponse", "GuestStatsResponse",
    "VendorCreate", "VendorContractUpdate", "VendorResponse", "VendorStatsResponse",
]
