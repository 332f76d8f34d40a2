"""
Event model: the root record that owns guests and vendors.

Key design decisions:
- `guest_count` / `vendor_count` are denormalized caches of the live number of
  dependent rows. They are rewritten by the service that mutates guests or
  vendors (see services/counters.py), never derived lazily on read.
- Guests and vendors reference events by `event_id` without a database
  foreign key; removing dependents is the service's job (cascade delete).
- Index on `date` for the "upcoming, ordered by date" listing.
"""

from datetime import date, datetime, timezone
import math
from typing import Literal, get_args

from sqlalchemy import Column, Integer, String, Text, Date, Float, Index, CheckConstraint

from eventplanner.db.base import Base, TimestampMixin

EventStatus = Literal["planning", "confirmed", "completed", "cancelled"]
EVENT_STATUSES = get_args(EventStatus)


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    time = Column(Text, nullable=False)
    location = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="planning")
    budget = Column(Float, nullable=False, default=0)
    guest_count = Column(Integer, nullable=False, default=0)
    vendor_count = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(
            "status IN ('planning', 'confirmed', 'completed', 'cancelled')",
            name="check_event_status",
        ),
        CheckConstraint("budget >= 0", name="check_event_budget_non_negative"),
        CheckConstraint("guest_count >= 0", name="check_event_guest_count_non_negative"),
        CheckConstraint("vendor_count >= 0", name="check_event_vendor_count_non_negative"),
        Index("ix_events_date", "date"),
        Index("ix_events_status", "status"),
        Index("ix_events_created_at", "created_at"),
    )

    @property
    def is_upcoming(self) -> bool:
        return self.date >= datetime.now(timezone.utc).date()

    def days_until(self, now: datetime | None = None) -> int:
        """Whole days until the event's midnight (UTC), rounded up. Negative once past."""
        now = now or datetime.now(timezone.utc)
        starts = datetime.combine(self.date, datetime.min.time(), tzinfo=timezone.utc)
        return math.ceil((starts - now).total_seconds() / 86400)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, date={self.date}, guests={self.guest_count}, vendors={self.vendor_count})>"


def today() -> date:
    return datetime.now(timezone.utc).date()
