"""
Guest model: an invitee owned by exactly one event.
"""

from typing import Literal, get_args

from sqlalchemy import Column, Integer, String, Text, Boolean, Index, CheckConstraint

from eventplanner.db.base import Base, TimestampMixin

RSVPStatus = Literal["pending", "confirmed", "declined"]
RSVP_STATUSES = get_args(RSVPStatus)


class Guest(Base, TimestampMixin):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    rsvp_status = Column(String(20), nullable=False, default="pending")
    plus_one = Column(Boolean, nullable=False, default=False)
    dietary_restrictions = Column(String(200), nullable=True)
    notes = Column(String(300), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "rsvp_status IN ('pending', 'confirmed', 'declined')",
            name="check_guest_rsvp_status",
        ),
        # Stats and filtered listings always scope by event first
        Index("ix_guests_event_rsvp", "event_id", "rsvp_status"),
        Index("ix_guests_name", "name"),
    )

    @property
    def total_attendees(self) -> int:
        return 2 if self.plus_one else 1

    def __repr__(self) -> str:
        return f"<Guest(id={self.id}, event={self.event_id}, name={self.name}, rsvp={self.rsvp_status})>"
