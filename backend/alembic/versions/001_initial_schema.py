"""Initial schema: events, guests, vendors with indexes and constraints.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Events table
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Text(), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'planning'")),
        sa.Column("budget", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("guest_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("vendor_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('planning', 'confirmed', 'completed', 'cancelled')",
            name="check_event_status",
        ),
        sa.CheckConstraint("budget >= 0", name="check_event_budget_non_negative"),
        sa.CheckConstraint("guest_count >= 0", name="check_event_guest_count_non_negative"),
        sa.CheckConstraint("vendor_count >= 0", name="check_event_vendor_count_non_negative"),
    )
    op.create_index("ix_events_id", "events", ["id"])
    # Listings are always ordered (and optionally bounded) by date
    op.create_index("ix_events_date", "events", ["date"])
    op.create_index("ix_events_status", "events", ["status"])
    op.create_index("ix_events_created_at", "events", ["created_at"])

    # Guests table. event_id is deliberately not a foreign key: removing an
    # event's guests is done by the event delete itself.
    op.create_table(
        "guests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("rsvp_status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("plus_one", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("dietary_restrictions", sa.String(200), nullable=True),
        sa.Column("notes", sa.String(300), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "rsvp_status IN ('pending', 'confirmed', 'declined')",
            name="check_guest_rsvp_status",
        ),
    )
    op.create_index("ix_guests_id", "guests", ["id"])
    op.create_index("ix_guests_event_id", "guests", ["event_id"])
    # Covers per-event RSVP filters and stats
    op.create_index("ix_guests_event_rsvp", "guests", ["event_id", "rsvp_status"])
    op.create_index("ix_guests_name", "guests", ["name"])

    # Vendors table
    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("contact_person", sa.String(100), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=False),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("address", sa.String(200), nullable=True),
        sa.Column("rating", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("price_range", sa.String(4), nullable=False, server_default=sa.text("'$$'")),
        sa.Column("services", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'researching'")),
        sa.Column("quoted_price", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("final_price", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("contract_signed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deposit_paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deposit_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("notes", sa.String(500), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "category IN ('venue', 'catering', 'decorations', 'entertainment', "
            "'photography', 'transportation', 'florist', 'other')",
            name="check_vendor_category",
        ),
        sa.CheckConstraint(
            "status IN ('researching', 'contacted', 'quoted', 'booked', 'confirmed', 'cancelled')",
            name="check_vendor_status",
        ),
        sa.CheckConstraint("price_range IN ('$', '$$', '$$$', '$$$$')", name="check_vendor_price_range"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="check_vendor_rating_range"),
        sa.CheckConstraint(
            "quoted_price >= 0 AND final_price >= 0 AND deposit_amount >= 0",
            name="check_vendor_amounts_non_negative",
        ),
    )
    op.create_index("ix_vendors_id", "vendors", ["id"])
    op.create_index("ix_vendors_event_id", "vendors", ["event_id"])
    op.create_index("ix_vendors_event_category", "vendors", ["event_id", "category"])
    op.create_index("ix_vendors_event_status", "vendors", ["event_id", "status"])
    op.create_index("ix_vendors_name", "vendors", ["name"])


def downgrade() -> None:
    op.drop_table("vendors")
    op.drop_table("guests")
    op.drop_table("events")
