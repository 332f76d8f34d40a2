"""
Pydantic schemas for vendor-related request/response validation.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from eventplanner.models.vendor import PriceRange, VendorCategory, VendorStatus
from eventplanner.schemas.base import InputSchema, OutputSchema, OptionalText, EmailText


def _services_list(value):
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if not (isinstance(item, str) and not item.strip())]
    return value


class VendorCreate(InputSchema):
    event_id: int = Field(..., title="Event ID")
    name: str = Field(..., min_length=1, max_length=100, title="Vendor name")
    category: VendorCategory = Field(..., title="Category")
    contact_person: OptionalText = Field(None, max_length=100, title="Contact person name")
    email: EmailText = Field(None, title="Email address")
    phone: str = Field(..., min_length=1, title="Phone number")
    website: OptionalText = Field(None, title="Website")
    address: OptionalText = Field(None, max_length=200, title="Address")
    rating: float = Field(
        0,
        ge=0,
        le=5,
        title="Rating",
        json_schema_extra={
            "messages": {
                "greater_than_equal": "Rating cannot be less than 0",
                "less_than_equal": "Rating cannot be more than 5",
            }
        },
    )
    price_range: PriceRange = Field("$$", title="Price range")
    services: Annotated[list[str], BeforeValidator(_services_list)] = Field(
        default_factory=list, title="Services"
    )
    status: VendorStatus = Field("researching", title="Status")
    quoted_price: float = Field(0, ge=0, title="Quoted price")
    final_price: float = Field(0, ge=0, title="Final price")
    contract_signed: bool = Field(False, title="Contract signed")
    deposit_paid: bool = Field(False, title="Deposit paid")
    deposit_amount: float = Field(0, ge=0, title="Deposit amount")
    notes: OptionalText = Field(None, max_length=500, title="Notes")


class VendorContractUpdate(InputSchema):
    """Partial patch: only keys present (and not null) in the payload are applied."""

    contract_signed: Optional[bool] = Field(None, title="Contract signed")
    deposit_paid: Optional[bool] = Field(None, title="Deposit paid")
    deposit_amount: Optional[float] = Field(None, ge=0, title="Deposit amount")


class VendorResponse(OutputSchema):
    id: int
    event_id: int
    name: str
    category: str
    contact_person: Optional[str]
    email: Optional[str]
    phone: str
    website: Optional[str]
    address: Optional[str]
    rating: float
    price_range: str
    services: list[str]
    status: str
    quoted_price: float
    final_price: float
    contract_signed: bool
    deposit_paid: bool
    deposit_amount: float
    notes: Optional[str]
    is_secured: bool
    created_at: datetime
    updated_at: datetime


class VendorPricing(OutputSchema):
    total_quoted: float
    total_final: float
    total_deposits: float


class CategoryBreakdown(OutputSchema):
    category: str
    count: int
    booked: int


class VendorStatsResponse(OutputSchema):
    total: int
    booked: int
    contracts_signed: int
    deposits_paid: int
    pricing: VendorPricing
    category_breakdown: list[CategoryBreakdown]
