"""add booking slots table

Revision ID: 3f1c2b7a9d4e
Create Date: 2024-03-01 12:00:41.519237
"""

from alembic import op

import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1c2b7a9d4e"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "booking_slots",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("event_id", sa.String(length=64), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("purpose", sa.String(length=256), nullable=False),
        sa.Column("status", sa.Enum("AVAILABLE", "BOOKED", name="slotstatus"), nullable=False),
        sa.Column("booked_by_name", sa.String(length=256), nullable=True),
        sa.Column("booked_by_email", sa.String(length=256), nullable=True),
        sa.Column("booked_by_enrollment", sa.String(length=256), nullable=True),
        sa.Column("booked_at", sa.DateTime(), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        mysql_collate="utf8mb4_bin",
    )
    op.create_index(op.f("ix_booking_slots_event_id"), "booking_slots", ["event_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_booking_slots_event_id"), table_name="booking_slots")
    op.drop_table("booking_slots")
