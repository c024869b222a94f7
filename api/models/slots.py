from __future__ import annotations

import datetime as dt
import enum
from typing import Any
from uuid import uuid4

from sqlalchemy import Column, Date, Enum, String, Time, update
from sqlalchemy.orm import Mapped

from api.database import Base, db
from api.database.database import UTCDateTime
from api.utils.clock import format_time
from api.utils.utc import utcnow


class SlotStatus(enum.Enum):
    AVAILABLE = "available"
    BOOKED = "booked"


class Slot(Base):
    __tablename__ = "booking_slots"

    id: Mapped[str] = Column(String(36), primary_key=True, unique=True)
    event_id: Mapped[str] = Column(String(64), index=True, nullable=False)
    date: Mapped[dt.date] = Column(Date, nullable=False)
    start_time: Mapped[dt.time] = Column(Time, nullable=False)
    end_time: Mapped[dt.time] = Column(Time, nullable=False)
    purpose: Mapped[str] = Column(String(256), nullable=False)
    status: Mapped[SlotStatus] = Column(Enum(SlotStatus), nullable=False)
    booked_by_name: Mapped[str | None] = Column(String(256), nullable=True)
    booked_by_email: Mapped[str | None] = Column(String(256), nullable=True)
    booked_by_enrollment: Mapped[str | None] = Column(String(256), nullable=True)
    booked_at: Mapped[dt.datetime | None] = Column(UTCDateTime, nullable=True)
    created_by: Mapped[str] = Column(String(36), nullable=False)
    created_at: Mapped[dt.datetime] = Column(UTCDateTime, nullable=False)
    updated_at: Mapped[dt.datetime] = Column(UTCDateTime, nullable=False)

    @property
    def booked(self) -> bool:
        return self.status == SlotStatus.BOOKED

    @property
    def booked_by(self) -> dict[str, Any] | None:
        if not self.booked or self.booked_at is None:
            return None

        return {
            "name": self.booked_by_name,
            "email": self.booked_by_email,
            "enrollment": self.booked_by_enrollment,
            "booked_at": self.booked_at.timestamp(),
        }

    @property
    def serialize(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "date": self.date.isoformat(),
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "purpose": self.purpose,
            "status": self.status.value,
            "booked_by": self.booked_by,
            "created_by": self.created_by,
            "created_at": self.created_at.timestamp(),
            "updated_at": self.updated_at.timestamp(),
        }

    @classmethod
    async def create(
        cls, event_id: str, date: dt.date, start_time: dt.time, end_time: dt.time, purpose: str, created_by: str
    ) -> Slot:
        now = utcnow()
        slot = cls(
            id=str(uuid4()),
            event_id=event_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            purpose=purpose,
            status=SlotStatus.AVAILABLE,
            booked_by_name=None,
            booked_by_email=None,
            booked_by_enrollment=None,
            booked_at=None,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        await db.add(slot)
        return slot

    def update(
        self,
        *,
        date: dt.date | None = None,
        start_time: dt.time | None = None,
        end_time: dt.time | None = None,
        purpose: str | None = None,
    ) -> None:
        if date is not None:
            self.date = date
        if start_time is not None:
            self.start_time = start_time
        if end_time is not None:
            self.end_time = end_time
        if purpose is not None:
            self.purpose = purpose
        self.updated_at = utcnow()

    @classmethod
    async def book(cls, slot_id: str, name: str, email: str, enrollment: str) -> bool:
        """Book the slot if it is still available. Returns whether the booking succeeded."""

        now = utcnow()
        result = await db.exec(
            update(cls)
            .where(cls.id == slot_id, cls.status == SlotStatus.AVAILABLE)
            .values(
                status=SlotStatus.BOOKED,
                booked_by_name=name,
                booked_by_email=email,
                booked_by_enrollment=enrollment,
                booked_at=now,
                updated_at=now,
            )
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    @classmethod
    async def cancel(cls, slot_id: str) -> bool:
        """Release a booked slot. Returns whether the slot was booked."""

        result = await db.exec(
            update(cls)
            .where(cls.id == slot_id, cls.status == SlotStatus.BOOKED)
            .values(
                status=SlotStatus.AVAILABLE,
                booked_by_name=None,
                booked_by_email=None,
                booked_by_enrollment=None,
                booked_at=None,
                updated_at=utcnow(),
            )
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]
