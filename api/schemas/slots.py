from datetime import date, time
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, StringConstraints

from api.models.slots import SlotStatus
from api.utils.clock import TIME_12H_PATTERN, parse_time
from api.utils.utc import normalize_date


Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=256)]
SlotDate = Annotated[date, BeforeValidator(normalize_date)]
SlotTime = Annotated[time, BeforeValidator(parse_time)]


class BookedBy(BaseModel):
    name: str = Field(description="Name of the person who booked the slot")
    email: str = Field(description="Email address of the person who booked the slot")
    enrollment: str = Field(description="Enrollment number of the person who booked the slot")
    booked_at: float = Field(description="Timestamp of the booking")


class Slot(BaseModel):
    id: str = Field(description="Slot ID")
    event_id: str = Field(description="ID of the event the slot belongs to")
    event: dict[str, Any] | None = Field(description="The event the slot belongs to")
    date: str = Field(description="Day of the slot (YYYY-MM-DD, UTC)")
    start_time: str = Field(pattern=TIME_12H_PATTERN, description="Start time of the slot (e.g. 2:30 PM)")
    end_time: str = Field(pattern=TIME_12H_PATTERN, description="End time of the slot (e.g. 3:00 PM)")
    purpose: str = Field(description="Purpose of the slot")
    status: SlotStatus = Field(description="Whether the slot is available or booked")
    booked_by: BookedBy | None = Field(description="The booking, present only if the slot is booked")
    created_by: str = Field(description="ID of the admin who created the slot")
    created_at: float = Field(description="Creation timestamp")
    updated_at: float = Field(description="Timestamp of the last modification")


class CreateSlot(BaseModel):
    event_id: Text = Field(description="ID of the event the slot belongs to")
    date: SlotDate = Field(description="Day of the slot (ISO 8601 date or datetime, converted to the UTC day)")
    start_time: SlotTime = Field(description="Start time of the slot (e.g. 14:30 or 2:30 PM)")
    end_time: SlotTime = Field(description="End time of the slot (e.g. 15:00 or 3:00 PM)")
    purpose: Text = Field(description="Purpose of the slot")


class UpdateSlot(BaseModel):
    date: SlotDate | None = Field(None, description="Day of the slot")
    start_time: SlotTime | None = Field(None, description="Start time of the slot")
    end_time: SlotTime | None = Field(None, description="End time of the slot")
    purpose: Text | None = Field(None, description="Purpose of the slot")


class BookSlot(BaseModel):
    name: Text = Field(description="Name of the person booking the slot")
    email: Text = Field(description="Email address of the person booking the slot")
    enrollment: Text = Field(description="Enrollment number of the person booking the slot")


class SlotRemoved(BaseModel):
    message: str
