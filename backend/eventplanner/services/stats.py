"""
Statistics aggregation for an event's guests and vendors.

Every statistic the API exposes (event details, event stats, guest stats,
vendor stats) is computed here from the event's fetched rows in one pass.
The endpoints only differ in which fields they show and what they call them:

    details  guestStats  {total, confirmed, pending, declined}
             vendorStats {total, booked, totalQuoted, totalFinal}
    stats    guests      {total, confirmed, pending = total - confirmed}
             vendors     {total, booked, researching = total - booked}

Note that `estimated_attendees` counts each confirmed plus-one as one extra
attendee; it is not the sum of `Guest.total_attendees`.
"""

from dataclasses import dataclass, field
from typing import Iterable

from eventplanner.models.guest import Guest
from eventplanner.models.vendor import Vendor


@dataclass
class GuestSummary:
    total: int = 0
    confirmed: int = 0
    pending: int = 0
    declined: int = 0
    with_plus_one: int = 0

    @property
    def estimated_attendees(self) -> int:
        return self.confirmed + self.with_plus_one

    def rsvp_breakdown(self) -> dict:
        return {
            "total": self.total,
            "confirmed": self.confirmed,
            "pending": self.pending,
            "declined": self.declined,
        }

    def full(self) -> dict:
        return {
            **self.rsvp_breakdown(),
            "with_plus_one": self.with_plus_one,
            "estimated_attendees": self.estimated_attendees,
        }

    def headline(self) -> dict:
        return {
            "total": self.total,
            "confirmed": self.confirmed,
            "pending": self.total - self.confirmed,
        }


@dataclass
class VendorSummary:
    total: int = 0
    booked: int = 0
    contracts_signed: int = 0
    deposits_paid: int = 0
    total_quoted: float = 0
    total_final: float = 0
    total_deposits: float = 0
    # category -> {"category", "count", "booked"}, in order of first appearance
    categories: dict = field(default_factory=dict)

    def category_breakdown(self) -> list[dict]:
        # sorted() is stable, so ties keep first-appearance order
        return sorted(self.categories.values(), key=lambda c: c["count"], reverse=True)

    def pricing_summary(self) -> dict:
        return {
            "total": self.total,
            "booked": self.booked,
            "total_quoted": self.total_quoted,
            "total_final": self.total_final,
        }

    def full(self) -> dict:
        return {
            "total": self.total,
            "booked": self.booked,
            "contracts_signed": self.contracts_signed,
            "deposits_paid": self.deposits_paid,
            "pricing": {
                "total_quoted": self.total_quoted,
                "total_final": self.total_final,
                "total_deposits": self.total_deposits,
            },
            "category_breakdown": self.category_breakdown(),
        }

    def headline(self) -> dict:
        return {
            "total": self.total,
            "booked": self.booked,
            "researching": self.total - self.booked,
        }


def summarize_guests(guests: Iterable[Guest]) -> GuestSummary:
    summary = GuestSummary()
    for guest in guests:
        summary.total += 1
        if guest.rsvp_status == "confirmed":
            summary.confirmed += 1
            if guest.plus_one:
                summary.with_plus_one += 1
        elif guest.rsvp_status == "pending":
            summary.pending += 1
        elif guest.rsvp_status == "declined":
            summary.declined += 1
    return summary


def summarize_vendors(vendors: Iterable[Vendor]) -> VendorSummary:
    summary = VendorSummary()
    for vendor in vendors:
        summary.total += 1
        summary.total_quoted += vendor.quoted_price or 0
        summary.total_final += vendor.final_price or 0
        summary.total_deposits += vendor.deposit_amount or 0
        if vendor.contract_signed:
            summary.contracts_signed += 1
        if vendor.deposit_paid:
            summary.deposits_paid += 1

        bucket = summary.categories.setdefault(
            vendor.category, {"category": vendor.category, "count": 0, "booked": 0}
        )
        bucket["count"] += 1
        if vendor.is_booked:
            summary.booked += 1
            bucket["booked"] += 1
    return summary
