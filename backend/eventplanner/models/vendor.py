"""
Vendor model: a supplier being researched or booked for one event.
"""

from typing import Literal, get_args

from sqlalchemy import Column, Integer, String, Text, Boolean, Float, JSON, Index, CheckConstraint

from eventplanner.db.base import Base, TimestampMixin

VendorCategory = Literal[
    "venue",
    "catering",
    "decorations",
    "entertainment",
    "photography",
    "transportation",
    "florist",
    "other",
]
VENDOR_CATEGORIES = get_args(VendorCategory)

VendorStatus = Literal["researching", "contacted", "quoted", "booked", "confirmed", "cancelled"]
VENDOR_STATUSES = get_args(VendorStatus)

PriceRange = Literal["$", "$$", "$$$", "$$$$"]

# Statuses that count a vendor as booked in every statistic
BOOKED_STATUSES = ("booked", "confirmed")


class Vendor(Base, TimestampMixin):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(30), nullable=False)
    contact_person = Column(String(100), nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=False)
    website = Column(Text, nullable=True)
    address = Column(String(200), nullable=True)
    rating = Column(Float, nullable=False, default=0)
    price_range = Column(String(4), nullable=False, default="$$")
    services = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default="researching")
    quoted_price = Column(Float, nullable=False, default=0)
    final_price = Column(Float, nullable=False, default=0)
    contract_signed = Column(Boolean, nullable=False, default=False)
    deposit_paid = Column(Boolean, nullable=False, default=False)
    deposit_amount = Column(Float, nullable=False, default=0)
    notes = Column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "category IN ('venue', 'catering', 'decorations', 'entertainment', "
            "'photography', 'transportation', 'florist', 'other')",
            name="check_vendor_category",
        ),
        CheckConstraint(
            "status IN ('researching', 'contacted', 'quoted', 'booked', 'confirmed', 'cancelled')",
            name="check_vendor_status",
        ),
        CheckConstraint("price_range IN ('$', '$$', '$$$', '$$$$')", name="check_vendor_price_range"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="check_vendor_rating_range"),
        CheckConstraint(
            "quoted_price >= 0 AND final_price >= 0 AND deposit_amount >= 0",
            name="check_vendor_amounts_non_negative",
        ),
        Index("ix_vendors_event_category", "event_id", "category"),
        Index("ix_vendors_event_status", "event_id", "status"),
        Index("ix_vendors_name", "name"),
    )

    @property
    def is_booked(self) -> bool:
        return self.status in BOOKED_STATUSES

    @property
    def is_secured(self) -> bool:
        return bool(self.contract_signed and self.deposit_paid)

    def __repr__(self) -> str:
        return f"<Vendor(id={self.id}, event={self.event_id}, name={self.name}, category={self.category}, status={self.status})>"
